import os
import subprocess
import sys
from pathlib import Path

import pytest

from storefront_client import GuestCart

REPO_ROOT = Path(__file__).resolve().parent.parent


HEADPHONES = {"id": 2, "title": "Sony WH-1000XM5", "price": 328.0, "image": "headphones.jpg"}
CABLE = {"id": 40, "title": "USB-C Cable", "price": 9.5}


def test_adding_same_product_increments_quantity():
    cart = GuestCart()
    cart.add(HEADPHONES)
    cart.add(HEADPHONES, 2)

    assert len(cart) == 1
    assert cart.lines[0].quantity == 3
    assert cart.lines[0].image == "headphones.jpg"


def test_update_and_remove():
    cart = GuestCart()
    cart.add(HEADPHONES)
    cart.add(CABLE)

    cart.update(40, 4)
    assert cart.to_list()[1]["quantity"] == 4

    cart.remove(2)
    assert [line.product_id for line in cart.lines] == [40]

    with pytest.raises(KeyError):
        cart.update(2, 1)


def test_rejects_non_positive_quantities():
    cart = GuestCart()
    with pytest.raises(ValueError):
        cart.add(CABLE, 0)
    cart.add(CABLE)
    with pytest.raises(ValueError):
        cart.update(40, 0)


def test_totals_match_server_pricing():
    cart = GuestCart()
    cart.add(CABLE, 2)
    totals = cart.totals()
    assert totals["subtotal"] == 19.0
    assert totals["shipping"] == 5.99
    assert totals["tax"] == 1.52
    assert totals["total"] == 26.51


def test_merge_payload():
    cart = GuestCart()
    cart.add(HEADPHONES)
    cart.add(CABLE, 3)
    assert cart.merge_payload() == {
        "items": [{"product_id": 2, "quantity": 1}, {"product_id": 40, "quantity": 3}]
    }


def test_client_imports_without_server_secrets():
    env = {k: v for k, v in os.environ.items() if k not in ("JWT_SECRET_KEY", "JWT_REFRESH_SECRET_KEY", "COOKIE_SECRET")}
    env["ENVIRONMENT"] = "production"
    script = (
        "import sys, storefront_client\n"
        "print(storefront_client.GuestCart().totals()['total'])\n"
        "assert 'shared.config.settings' not in sys.modules\n"
    )

    result = subprocess.run([sys.executable, "-c", script], cwd=REPO_ROOT, env=env, capture_output=True, text=True)

    assert result.returncode == 0, result.stderr
    assert result.stdout.strip() == "0.0"
