from django.urls import path
from . import views

app_name = 'notifications'

urlpatterns = [
    path('', views.notification_list, name='notification-list'),
    path('read-all/', views.notification_read_all, name='notification-read-all'),
    path('<uuid:notification_id>/read/', views.notification_read, name='notification-read'),
]
