from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'properties'

router = DefaultRouter()
router.register(r'', views.PropertyViewSet, basename='property')

urlpatterns = [
    # Property ViewSet routes
    # GET    /api/properties/              - List user's properties
    # POST   /api/properties/              - Create property
    # GET    /api/properties/{id}/         - Get property details
    # PUT    /api/properties/{id}/         - Rename property (admin)
    # PATCH  /api/properties/{id}/         - Rename property (admin)

    # Custom property actions
    # GET    /api/properties/{id}/members/        - Roster
    # POST   /api/properties/{id}/add_member/     - Add email (admin)
    # DELETE /api/properties/{id}/remove_member/  - Remove email (admin)
    # PUT    /api/properties/{id}/set_members/    - Replace roster (admin)
    # GET    /api/properties/{id}/admins/         - List admins
    # PUT    /api/properties/{id}/admins/         - Replace admins (admin)
    # GET    /api/properties/{id}/settings/       - Settings document
    # PUT    /api/properties/{id}/settings/       - Replace settings (admin)

    path('<uuid:property_id>/is-admin/', views.is_admin, name='is-admin'),

    path('', include(router.urls)),
]
