from django.urls import path
from . import views

app_name = 'core'

urlpatterns = [
    path('', views.home, name='home'),
    path('apply/', views.apply, name='apply'),
    path('apply/resume/', views.upload_resume, name='upload_resume'),
    path('apply/resume/clear/', views.clear_resume, name='clear_resume'),
    path('apply/resume/progress/<str:upload_id>/', views.upload_progress, name='upload_progress'),
]
