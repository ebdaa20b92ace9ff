from django import forms

from .menu import DRINKS, MENU, SNACKS
from .models import STATUS_FLAGS


def _field_name(index):
    return f"item_{index}"


class OrderForm(forms.Form):
    """
    Customer order form: one quantity input per menu item.
    """

    def __init__(self, *args, **kwargs):
        """
        Build one IntegerField per menu item, drinks first.
        """
        super().__init__(*args, **kwargs)
        self.item_names = {}

        for index, name in enumerate(MENU):
            field_name = _field_name(index)
            self.item_names[field_name] = name
            self.fields[field_name] = forms.IntegerField(
                label=name,
                min_value=0,
                initial=0,
                required=False,
            )

    def error_messages_for_display(self):
        """Field errors prefixed with the menu item they belong to."""
        for field_name, errors in self.errors.items():
            label = self.item_names.get(field_name)
            for error in errors:
                yield f"{label}: {error}" if label else error

    def menu_rows(self, kind):
        """Bound fields for the template, grouped as "drinks" or "snacks"."""
        group = DRINKS if kind == "drinks" else SNACKS
        return [
            (self[field_name], name, MENU[name])
            for field_name, name in self.item_names.items()
            if name in group
        ]

    def clean(self):
        cleaned = super().clean()
        cart = {}
        for field_name, name in self.item_names.items():
            qty = cleaned.get(field_name) or 0
            if qty:
                cart[name] = qty

        if not cart and not self.errors:
            raise forms.ValidationError("주문할 상품을 선택해주세요!")

        cleaned["cart"] = cart
        return cleaned


class AdvanceStatusForm(forms.Form):
    """
    Kitchen button press: move an order to "made" or "served".
    """
    status = forms.ChoiceField(
        choices=[(status.value, status.display_name) for status in STATUS_FLAGS]
    )
