"""Focus-to-affordance mapping for the card widget."""

from cardform.form.models import FocusAffordance


def focus_affordance(has_focus: bool) -> FocusAffordance:
    return FocusAffordance.FOCUSED if has_focus else FocusAffordance.UNFOCUSED
