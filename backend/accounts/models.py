from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    ADMIN = "ADMIN"
    AGENCY = "AGENCY"
    RENTER = "RENTER"
    TYPES = [
        (ADMIN, "Admin"),
        (AGENCY, "Agency"),
        (RENTER, "Renter"),
    ]

    type = models.CharField(max_length=10, choices=TYPES, default=RENTER)
    language = models.CharField(max_length=2, default="en")
    display_name = models.CharField(max_length=120, blank=True)

    def get_display_name(self) -> str:
        return self.display_name or f"{self.first_name} {self.last_name}".strip() or self.email
