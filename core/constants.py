"""
Core — Constants

@file core/constants.py
"""

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

MONEY_PLACES = 2

# Stock level labels used by the stock status report.
STOCK_LEVEL_LOW = 'LOW'
STOCK_LEVEL_MEDIUM = 'MEDIUM'
STOCK_LEVEL_HIGH = 'HIGH'

DEFAULT_LOW_STOCK_THRESHOLD = 10
DEFAULT_MEDIUM_STOCK_THRESHOLD = 20

# Field limits shared by models, serializers and service-layer validation.
PART_NAME_MAX_LENGTH = 100
PART_CATEGORY_MAX_LENGTH = 50
PRICE_MAX_DIGITS = 10

# Marks an omitted keyword in partial updates, where None may be a real value.
UNSET = object()
