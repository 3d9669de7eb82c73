from django.urls import path
from . import views

app_name = 'promotions'

urlpatterns = [
    path('<uuid:promoted_poll_id>/retry-payment/', views.retry_payment, name='retry_payment'),
    path('<uuid:promoted_poll_id>/retry-payment/confirm/', views.confirm_retry_payment, name='confirm_retry_payment'),
]
