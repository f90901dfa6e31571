from django.core.management import call_command

from core.models import NumberSeries, RecordStatus


def test_seed_is_idempotent_and_keeps_counters(db):
    RecordStatus.objects.all().delete()

    call_command("seed_reference_data")
    assert set(RecordStatus.objects.values_list("code", flat=True)) == {RecordStatus.ACTIVE, RecordStatus.VOIDED}
    assert NumberSeries.objects.get(code=NumberSeries.SALES_ORDER).prefix == "F-"

    NumberSeries.objects.filter(code=NumberSeries.SALES_ORDER).update(next_number=42)
    call_command("seed_reference_data")

    assert RecordStatus.objects.count() == 2
    assert NumberSeries.objects.get(code=NumberSeries.SALES_ORDER).next_number == 42
