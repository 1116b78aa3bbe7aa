# Formato MBG (grillas binarias)
MBG_MAGIC = b"MBG_"
MBG_VERSION = 2
MBG_EXPECTED_PAYLOADS_PER_FORECAST = 1
MBG_EXPECTED_PAYLOAD_META = 0
MBG_EXPECTED_FORECASTS = 1

# Valores mayores casi seguro indican bytes en big-endian
MBG_PAYLOAD_SANITY_LIMIT = 100_000

# Anchos de valor soportados (bytes)
PRECISION_FLOAT32 = 4
PRECISION_FLOAT64 = 8

# Fechas seriales: 30 * 2**32 segundos expresados en días
SERIAL_DATE_MAX_SECONDS = 1.2884901888e11
SERIAL_DATE_MAX_DAYS = SERIAL_DATE_MAX_SECONDS / 86400.0

SECONDS_PER_DAY = 86400
MEAN_GREGORIAN_YEAR = 365.2425

# Días acumulados por mes (año normal / bisiesto)
CUMULATIVE_DAYS = (0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334, 365)
CUMULATIVE_DAYS_LEAP = (0, 31, 60, 91, 121, 152, 182, 213, 244, 274, 305, 335, 366)

# Códigos HTTP
HTTP_SUCCESS_RANGE = range(200, 400)
