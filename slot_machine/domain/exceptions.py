"""Domain exceptions"""


class SlotMachineError(Exception):
    """Base class for slot machine errors"""


class InvalidPaylineError(SlotMachineError):
    """A payline points at a row outside the grid"""

    def __init__(self, payline, rows: int):
        super().__init__(f"Payline {list(payline)} references a row outside a {rows}-row grid")
        self.payline = payline
        self.rows = rows


class UnknownSymbolError(SlotMachineError):
    """A symbol that is not part of the catalog"""

    def __init__(self, emoji: str):
        super().__init__(f"Unknown symbol: {emoji!r}")
        self.emoji = emoji


class InvalidSaveFileError(SlotMachineError):
    """A save document that cannot be imported"""

    def __init__(self, status_message: str = "Invalid save file", details=None):
        super().__init__(status_message)
        self.status_message = status_message
        self.details = details if details is not None else {}
