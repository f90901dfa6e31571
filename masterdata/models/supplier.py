from django.db import models


class Supplier(models.Model):
    tax_id = models.CharField(max_length=20, unique=True)
    name = models.CharField(max_length=255)
    email = models.EmailField(blank=True, default="")
    phone = models.CharField(max_length=30, blank=True, default="")

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name
