"""
Static café menu and set-discount pricing.

A drink and a snack ordered together are billed as one set. Sets are
formed greedily: every drink that can be paired with a snack is.
"""

DRINK_PRICE = 3000
SNACK_PRICE = 3500
SET_PRICE = 5500

DRINKS = {
    "뜨아": DRINK_PRICE,
    "아아": DRINK_PRICE,
    "레모네이드": DRINK_PRICE,
    "아이스티": DRINK_PRICE,
}

SNACKS = {
    "핫도그": SNACK_PRICE,
    "컵볶이": SNACK_PRICE,
}

MENU = {**DRINKS, **SNACKS}


def _validate(cart):
    for name, qty in cart.items():
        if name not in MENU:
            raise ValueError(f"Unknown menu item: {name}")
        if qty < 0:
            raise ValueError(f"Negative quantity for {name}: {qty}")


def drink_count(cart):
    return sum(qty for name, qty in cart.items() if name in DRINKS)


def snack_count(cart):
    return sum(qty for name, qty in cart.items() if name in SNACKS)


def total(cart):
    """
    Total price of a cart (item name -> quantity) in won.

    >>> total({"아아": 2, "핫도그": 1})
    8500
    """
    _validate(cart)
    drinks = drink_count(cart)
    snacks = snack_count(cart)
    sets = min(drinks, snacks)
    return (
        sets * SET_PRICE
        + (drinks - sets) * DRINK_PRICE
        + (snacks - sets) * SNACK_PRICE
    )


def clean_cart(cart):
    """Drop zero quantities, keeping menu order."""
    _validate(cart)
    return {name: cart[name] for name in MENU if cart.get(name, 0) > 0}


def summary_lines(cart):
    return [f"• {name} x{qty}" for name, qty in clean_cart(cart).items()]


def format_won(amount):
    return f"{amount:,}원"
