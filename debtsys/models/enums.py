from enum import Enum


class AccountStatementType(str, Enum):
    mercado_pago = "MERCADO_PAGO"
    rappi = "RAPPI"
    universal = "UNIVERSAL"
    manual = "MANUAL"


class LogLevel(str, Enum):
    info = "info"
    warning = "warning"
    error = "error"
