# users/urls.py

from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import AdminUserViewSet, MeProfileView

router = DefaultRouter()
router.register(r'admin', AdminUserViewSet, basename='admin-user')

urlpatterns = [
    path('me/', MeProfileView.as_view(), name='user-me'),
    path('', include(router.urls)),
]
