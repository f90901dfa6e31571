from .record_status import RecordStatus
from .number_series import NumberSeries
