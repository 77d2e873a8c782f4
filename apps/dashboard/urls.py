from django.urls import path
from . import views

app_name = 'dashboard'

urlpatterns = [
    path('monthly/', views.monthly_summary, name='monthly-summary'),
    path('house-status/<uuid:property_id>/', views.house_status, name='house-status'),
]
