from django.db import models


class ExchangeRate(models.Model):
    """Multiplicative rate converting one unit of from_currency into to_currency"""

    from_currency = models.CharField(max_length=3)
    to_currency = models.CharField(max_length=3)
    rate = models.DecimalField(max_digits=20, decimal_places=8)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'exchange_rates'
        ordering = ['from_currency', 'to_currency']
        constraints = [
            models.UniqueConstraint(fields=['from_currency', 'to_currency'], name='unique_currency_pair'),
        ]

    def __str__(self):
        return f"{self.from_currency}->{self.to_currency} @ {self.rate}"

    def save(self, *args, **kwargs):
        self.from_currency = self.from_currency.upper()
        self.to_currency = self.to_currency.upper()
        super().save(*args, **kwargs)
