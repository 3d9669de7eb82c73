from django.core.management.base import BaseCommand
from apps.common.models import SystemSetting
from apps.payments.models import PaymentMethod


class Command(BaseCommand):
    help = 'Set up initial payment methods and payment settings'

    def handle(self, *args, **options):
        """Create initial payment methods"""

        payment_methods = [
            {
                'name': 'Wallet',
                'type': PaymentMethod.TYPE_WALLET,
                'description': 'Pay with your points balance',
                'is_active': True,
                'config': {},
            },
            {
                'name': 'Credit/Debit Card',
                'type': PaymentMethod.TYPE_STRIPE,
                'description': 'Pay by card through Stripe',
                'is_active': True,
                'config': {
                    'supported_currencies': ['USD', 'EUR', 'GBP'],
                },
            },
            {
                'name': 'Paystack',
                'type': PaymentMethod.TYPE_PAYSTACK,
                'description': 'Pay through Paystack',
                'is_active': True,
                'config': {
                    'supported_currencies': ['NGN', 'USD'],
                    'default_currency': 'NGN',
                },
            },
            {
                'name': 'PayPal',
                'type': PaymentMethod.TYPE_PAYPAL,
                'description': 'PayPal (not yet available)',
                'is_active': False,
                'config': {
                    'supported_currencies': ['USD', 'EUR', 'GBP'],
                },
            },
        ]

        default_settings = {
            SystemSetting.PROMOTED_POLLS: {
                'points_to_usd_conversion': 100,
            },
            SystemSetting.PAYMENT_GATEWAYS: {
                'default': ['wallet', 'stripe'],
                'countries': {
                    'NG': ['wallet', 'stripe', 'paystack'],
                },
            },
            SystemSetting.CURRENCIES: {
                'supported': ['USD', 'EUR', 'GBP', 'NGN'],
            },
        }

        created_count = 0
        updated_count = 0

        for method_data in payment_methods:
            method, created = PaymentMethod.objects.get_or_create(
                name=method_data['name'],
                defaults=method_data
            )

            if created:
                created_count += 1
                self.stdout.write(
                    self.style.SUCCESS(f'Created payment method: {method.name}')
                )
            else:
                for key, value in method_data.items():
                    if key != 'name':
                        setattr(method, key, value)
                method.save()
                updated_count += 1
                self.stdout.write(
                    self.style.WARNING(f'Updated payment method: {method.name}')
                )

        for key, value in default_settings.items():
            _, created = SystemSetting.objects.get_or_create(key=key, defaults={'value': value})
            if created:
                self.stdout.write(self.style.SUCCESS(f'Created setting: {key}'))

        self.stdout.write(
            self.style.SUCCESS(
                f'Payment methods setup complete. Created: {created_count}, Updated: {updated_count}'
            )
        )
