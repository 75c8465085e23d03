from django.urls import include, path

urlpatterns = [
    path("cart/", include("shopcart.urls", namespace="shopcart")),
]
