"""calcy: evaluate simple algebraic expressions over a selectable number type."""

__version__ = "0.3.0"
