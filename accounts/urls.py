from django.urls import path, re_path

from . import views

app_name = "accounts"

urlpatterns = [
    path("login/", views.LoginView.as_view(), name="login"),
    path("signup/", views.SignupView.as_view(), name="signup"),
    path("logout/", views.LogoutView.as_view(), name="logout"),
    path("login/google/", views.GoogleLoginView.as_view(), name="google_login"),
    # Accept both with and without trailing slashes to match the registered redirect URI exactly.
    re_path(r"^login/google/callback/?$", views.GoogleCallbackView.as_view(), name="google_callback"),
    path("admin/", views.DashboardView.as_view(), name="dashboard"),
    path("admin/applicants/<int:pk>/delete/", views.ApplicantDeleteView.as_view(), name="applicant_delete"),
    path("admin/applicants/<int:pk>/resume/", views.ApplicantResumeView.as_view(), name="applicant_resume"),
]
