from django.urls import path, include
from rest_framework.routers import SimpleRouter

from apps.transactions.api.v1.views import TransactionViewSet

router = SimpleRouter(trailing_slash=False)
router.register(r'transaction', TransactionViewSet, basename='transaction')

urlpatterns = [
    path('', include(router.urls)),
]
