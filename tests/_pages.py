# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Sample page contents shared across tests."""

PRODUCT_PAGE = "# Wireless Mouse\n\nBuy now for $29.99!\n\nIn stock\n\nAdd to cart"

ARTICLE_PAGE = "# My Post\n\nby Jane Smith\n\nPublished on March 3, 2024\n\n5 minutes read\n\nBody text..."

FAQ_PAGE = "Q: What is X?\nA: X is Y.\n\nQ: How does X work?\nA: It works by Z."

HOWTO_PAGE = (
    "# How to Brew Pour-Over Coffee\n\n"
    "1. Boil water to around 96 degrees\n"
    "2. Grind 20 grams of coffee beans\n"
    "3. Rinse the paper filter with hot water\n"
    "4. Pour slowly in circles for three minutes\n"
)

ORGANIZATION_PAGE = (
    "# Acme Robotics\n\n"
    "Acme Robotics was founded in 1998 by a small group of engineers.\n"
    "Our company has its headquarters in Boston and more than 400 employees.\n"
    "Our mission is to make warehouse automation safe and affordable."
)

SHORT_NOISE = "Just a quick note with nothing special."  # < 100 chars, no signals
