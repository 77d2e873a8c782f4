from django.urls import path
from . import views

app_name = 'expenses'

urlpatterns = [
    # Per-property
    path('property/<uuid:property_id>/', views.property_expenses, name='expense-list'),
    path('property/<uuid:property_id>/tags/', views.property_tags, name='tag-list'),
    path('property/<uuid:property_id>/shares/', views.property_shares, name='share-list'),
    path('property/<uuid:property_id>/allocation/', views.property_allocation, name='allocation'),

    # Single objects
    path('<uuid:expense_id>/', views.expense_detail, name='expense-detail'),
    path('tags/<uuid:tag_id>/', views.tag_detail, name='tag-detail'),
    path('shares/<uuid:share_id>/', views.share_detail, name='share-detail'),
]
