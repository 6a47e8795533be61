"""commodity-tracker: commodity prices, tariff schedules, and trade news."""

__version__ = "0.1.0"
