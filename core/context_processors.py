# core/context_processors.py
from shopcart.helpers import cart


def cart_context(request):
    """
    Make the request's Cart available in all templates as {{ cart }}.
    """
    return {"cart": cart(request)}
