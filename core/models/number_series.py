from django.conf import settings
from django.db import models, transaction

from core.exceptions import NumberSeriesNotConfigured


class NumberSeries(models.Model):
    """Simple, readable number series.

    The important part is *concurrency safety*:
    - We lock the NumberSeries row in the database (select_for_update)
    - We read next_number
    - We increment next_number and save
    - We return a formatted string (prefix + zero-padded number)

    This guarantees that two users creating orders at the same time do not get the same number.
    """

    SALES_ORDER = "sales_order"
    PURCHASE_ORDER = "purchase_order"

    code = models.CharField(max_length=50, unique=True)
    prefix = models.CharField(max_length=50, blank=True, default="")
    next_number = models.IntegerField(default=1)
    min_width = models.IntegerField(default=1)

    class Meta:
        ordering = ["code"]
        verbose_name_plural = "Number series"

    def __str__(self):
        return f"{self.code} ({self.prefix}{str(self.next_number).zfill(self.min_width)})"

    @transaction.atomic
    def allocate(self) -> str:
        """Allocate the next number without duplicates.

        Step-by-step:
        1) Start a DB transaction (atomic)
        2) Lock *this* NumberSeries row with select_for_update
        3) Read current next_number
        4) Increment next_number and save
        5) Return formatted string

        The lock is held until the outer transaction commits, so no other allocation can read
        the old next_number in parallel. If the outer transaction rolls back, the number is
        handed out again.
        """
        series = type(self).objects.select_for_update().get(pk=self.pk)

        current = series.next_number
        series.next_number = current + 1
        series.save(update_fields=["next_number"])

        return f"{series.prefix}{str(current).zfill(series.min_width)}"

    @classmethod
    def for_code(cls, code):
        """Return the series for code, creating it from BACKOFFICE_NUMBER_SERIES on first use."""
        series = cls.objects.filter(code=code).first()
        if series:
            return series

        definition = getattr(settings, "BACKOFFICE_NUMBER_SERIES", {}).get(code)
        if definition is None:
            raise NumberSeriesNotConfigured(code)

        series, _ = cls.objects.get_or_create(
            code=code,
            defaults={
                "prefix": definition.get("prefix", ""),
                "min_width": definition.get("min_width", 1),
            },
        )
        return series

    @classmethod
    def allocate_for(cls, code) -> str:
        return cls.for_code(code).allocate()
