from django.urls import path

from . import views

app_name = "shopcart"

urlpatterns = [
    path("", views.cart_detail, name="cart_detail"),
    path("mini/", views.cart_mini, name="cart_mini"),
    path("add/", views.cart_add, name="cart_add"),
    path("update/", views.cart_update, name="cart_update"),
    path("remove/", views.cart_remove, name="cart_remove"),
    path("destroy/", views.cart_destroy, name="cart_destroy"),
]
