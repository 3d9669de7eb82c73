from django.urls import path
from . import views

app_name = 'payments'

urlpatterns = [
    # Payment methods
    path('methods/', views.get_payment_methods, name='payment_methods'),
    path('methods/available/', views.get_available_payment_methods, name='available_payment_methods'),
    path('methods/<uuid:method_id>/', views.get_payment_method, name='payment_method'),

    # Payments
    path('wallet/pay/', views.pay_with_wallet, name='wallet_pay'),
    path('stripe/initialize/', views.initialize_stripe_payment, name='stripe_initialize'),
    path('paystack/initialize/', views.initialize_paystack_payment, name='paystack_initialize'),

    # Transactions
    path('transactions/', views.get_user_transactions, name='user_transactions'),
    path('transactions/all/', views.get_all_transactions, name='all_transactions'),
    path('transactions/<uuid:transaction_id>/status/', views.update_transaction_status, name='transaction_status'),

    # Currency
    path('convert/', views.convert_amount, name='convert_amount'),
]
