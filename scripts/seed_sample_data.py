#!/usr/bin/env python3
"""Seed sample options for local development.

Usage:
    python scripts/seed_sample_data.py [shop-domain]
"""
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from options_manager import create_app
from options_manager.extensions import db
from options_manager.models.option import Option
from options_manager.services import option_service

app = create_app()

SAMPLE_OPTIONS = [
    {
        "name": "Color",
        "type": "color",
        "values": [
            "Red",
            "Navy Blue",
            {"value": "Emerald Green", "isActive": False},
            "Black",
        ],
    },
    {
        "name": "Size",
        "type": "text",
        "values": ["XS", "S", "M", "L", "XL"],
    },
    {
        "name": "Material",
        "type": "text",
        "values": ["Cotton", "Linen", "Silk", "Wool"],
    },
    {
        "name": "Length (cm)",
        "type": "number",
        "values": ["90", "100", "110"],
    },
    {
        "name": "Print",
        "type": "image",
        "values": ["Floral", "Paisley", "Plain"],
    },
]


def seed(shop):
    with app.app_context():
        db.create_all()

        if Option.query.filter_by(shop=shop).first():
            print(f"{shop} already has options, skipping.")
            return

        for position, data in enumerate(SAMPLE_OPTIONS):
            option = option_service.create_option(shop, {**data, "position": position})
            print(f"Created {option.name} with {len(option.values)} values")

        print(f"\nSeeded {len(SAMPLE_OPTIONS)} options for {shop}.")


if __name__ == "__main__":
    seed(sys.argv[1] if len(sys.argv) > 1 else app.config["DEMO_SHOP"])
