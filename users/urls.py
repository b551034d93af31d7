from django.urls import path

from users.views import LoginApi, LogoutApi, ProfileApi, RegisterApi

app_name = "users"

urlpatterns = [
    path("register", RegisterApi.as_view(), name="register"),
    path("login", LoginApi.as_view(), name="login"),
    path("logout", LogoutApi.as_view(), name="logout"),
    path("profile", ProfileApi.as_view(), name="profile"),
]
