from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """User profile carrying the wallet points balance"""

    ROLE_USER = 'user'
    ROLE_ADMIN = 'admin'
    ROLE_CHOICES = [
        (ROLE_USER, 'User'),
        (ROLE_ADMIN, 'Admin'),
    ]

    points = models.IntegerField(default=0, help_text="Wallet points balance")
    currency = models.CharField(max_length=3, default='USD', help_text="Preferred ISO 4217 currency")
    country = models.CharField(max_length=2, blank=True, default='', help_text="ISO 3166 alpha-2 country code")
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_USER)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'users'
        verbose_name = 'User'
        verbose_name_plural = 'Users'

    def __str__(self):
        return self.username or f"User {self.id}"

    @property
    def is_admin(self):
        return self.role == self.ROLE_ADMIN
