from django.urls import path
from . import views

app_name = 'bookings'

urlpatterns = [
    # Per-property
    path('property/<uuid:property_id>/', views.property_bookings, name='property-bookings'),
    path('property/<uuid:property_id>/calendar/', views.blocked_calendar, name='blocked-calendar'),
    path('property/<uuid:property_id>/quote/', views.booking_quote, name='booking-quote'),

    # Single booking
    path('<uuid:booking_id>/', views.booking_detail, name='booking-detail'),
    path('<uuid:booking_id>/status/', views.booking_status, name='booking-status'),

    # Current user
    path('my/', views.my_bookings, name='my-bookings'),
]
