# shopcart/views.py
from __future__ import annotations

import json

from django.http import HttpResponseBadRequest, JsonResponse
from django.views.decorators.http import require_GET, require_POST

from .exceptions import InvalidArgument, InvalidHash
from .helpers import cart as get_cart


def _instance(request):
    return request.POST.get("instance") or request.GET.get("instance") or None


def _options(request):
    raw = request.POST.get("options")
    if not raw:
        return {}
    value = json.loads(raw)
    if not isinstance(value, dict):
        raise ValueError("options must be a JSON object")
    return value


def _summary(cart) -> dict:
    return {
        "instance": cart.get_instance(),
        "count": cart.count(),
        "items": cart.count_items(),
        "total": cart.total(),
    }


def _not_found(exc: InvalidHash) -> JsonResponse:
    return JsonResponse({"error": str(exc)}, status=404)


@require_GET
def cart_detail(request):
    cart = get_cart(request, _instance(request))
    data = _summary(cart)
    data["content"] = [item.to_dict() for item in cart.content().values()]
    return JsonResponse(data)


@require_GET
def cart_mini(request):
    return JsonResponse(_summary(get_cart(request, _instance(request))))


@require_POST
def cart_add(request):
    item_id = request.POST.get("id")
    title = request.POST.get("title")
    if not (item_id and title):
        return HttpResponseBadRequest("id and title required")
    try:
        options = _options(request)
    except ValueError as exc:
        return HttpResponseBadRequest(f"bad options: {exc}")
    cart = get_cart(request, _instance(request))
    try:
        item = cart.add(
            item_id,
            title,
            request.POST.get("qty", "1"),
            request.POST.get("price", "0"),
            options,
        )
    except InvalidArgument as exc:
        return HttpResponseBadRequest(str(exc))
    return JsonResponse({"item": item.to_dict(), **_summary(cart)}, status=201)


@require_POST
def cart_update(request):
    item_hash = request.POST.get("hash")
    if not item_hash:
        return HttpResponseBadRequest("hash required")
    attributes = {k: request.POST[k] for k in ("title", "qty", "price") if k in request.POST}
    if "options" in request.POST:
        try:
            attributes["options"] = _options(request)
        except ValueError as exc:
            return HttpResponseBadRequest(f"bad options: {exc}")
    if not attributes:
        return HttpResponseBadRequest("nothing to update")
    cart = get_cart(request, _instance(request))
    try:
        item = cart.update(item_hash, attributes)
    except InvalidHash as exc:
        return _not_found(exc)
    except InvalidArgument as exc:
        return HttpResponseBadRequest(str(exc))
    return JsonResponse({"item": item.to_dict() if item else None, **_summary(cart)})


@require_POST
def cart_remove(request):
    item_hash = request.POST.get("hash")
    if not item_hash:
        return HttpResponseBadRequest("hash required")
    cart = get_cart(request, _instance(request))
    cart.remove(item_hash)
    return JsonResponse(_summary(cart))


@require_POST
def cart_destroy(request):
    cart = get_cart(request, _instance(request))
    cart.destroy()
    return JsonResponse(_summary(cart))
