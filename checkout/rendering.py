from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from checkout.types import CheckoutView

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"
STATE_TEMPLATE = "checkout_state.html"

_environment = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
)


def render_checkout(view: CheckoutView, *, mount_target_id: str = "checkout-target") -> str:
    return _environment.get_template(STATE_TEMPLATE).render(view=view, mount_target_id=mount_target_id)
