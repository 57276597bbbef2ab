"""
Sale Errors - именованные виды отказов

Каждый отказ фатален для вызвавшей операции: нет внутренних повторов,
нет частичного commit. Вызывающая сторона получает конкретный тип ошибки,
а не generic Exception, чтобы различать:
- "попробуйте другую сумму" (PricingError, CapacityError)
- "продажа не активна" (AccessError)
- "система неверно сконфигурирована" (ConfigurationError)

Каждая ошибка несёт машиночитаемый reason (snake_case), совпадающий с
block_reason соответствующего gate.
"""


class SaleError(Exception):
    """Базовый класс всех отказов движка продажи."""

    default_reason = "sale_error"

    def __init__(self, message: str, reason: str | None = None):
        super().__init__(message)
        self.reason = reason or self.default_reason


class ConfigurationError(SaleError):
    """
    Некорректная конфигурация продажи.

    Возникает только при создании конфигурации (open_time >= close_time).
    Такую продажу невозможно сконструировать.
    """

    default_reason = "invalid_configuration"


class AccessError(SaleError):
    """
    Участник или момент времени не допускаются к операции.

    - участник заблокирован
    - окно продажи ещё не открыто / уже закрыто
    - claim до закрытия продажи
    - claim с нулевым балансом
    """

    default_reason = "access_denied"


class UnauthorizedError(AccessError):
    """Административная операция от не-владельца (AccessControl)."""

    default_reason = "not_owner"


class PricingError(SaleError):
    """
    Невозможно корректно перевести платёж в токены.

    - платёжный актив не из принимаемого набора
    - точность актива (decimals) больше 18
    - итоговое количество токенов равно нулю
    - цена oracle не строго положительна или oracle недоступен
    - feed oracle некорректен (нецелые значения, decimals вне [0, 18])
    """

    default_reason = "pricing_failed"


class CapacityError(SaleError):
    """Кумулятивный total_sold после покупки превысил бы global cap."""

    default_reason = "global_cap_exceeded"


class TransferError(SaleError):
    """Внешний коллаборатор перевода (collect/disburse) сообщил об отказе."""

    default_reason = "transfer_failed"
