from django.contrib import admin

from core.models import NumberSeries, RecordStatus


@admin.register(RecordStatus)
class RecordStatusAdmin(admin.ModelAdmin):
    list_display = ("code", "name")
    search_fields = ("code", "name")


@admin.register(NumberSeries)
class NumberSeriesAdmin(admin.ModelAdmin):
    list_display = ("code", "prefix", "next_number", "min_width")
    search_fields = ("code", "prefix")
