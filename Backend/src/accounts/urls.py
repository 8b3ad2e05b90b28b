from django.urls import path
from .views import LoginView, MeView

urlpatterns = [
    # Mot de passe partage -> jeton admin
    path("login/", LoginView.as_view(), name="admin_login"),

    # Etat du porteur courant
    path("me/", MeView.as_view(), name="me"),
]
