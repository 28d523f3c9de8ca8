CHANGE_TYPE_IN = "IN"
CHANGE_TYPE_OUT = "OUT"
CHANGE_TYPES = (CHANGE_TYPE_IN, CHANGE_TYPE_OUT)

# Wire value of days_until_stockout when no stockout is foreseeable (max signed int32).
UNBOUNDED_STOCKOUT_DAYS = 2_147_483_647

INITIAL_STOCK_REASON = "initial stock"
