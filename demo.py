#!/usr/bin/env python
from sdk.inventory_client import InventoryClient


def main():
    c = InventoryClient()

    # -----------------------------
    # Reset everything for demo
    # -----------------------------
    print("Resetting store...")
    c.reset()

    # -----------------------------
    # Add products
    # -----------------------------
    print("\nAdding products...")
    coffee = c.create_product("Coffee", 2.50, 10, "Drinks", "Freshly brewed filter coffee")
    muffin = c.create_product("Blueberry Muffin", 3.00, 4, "Bakery")
    print(coffee)
    print(muffin)

    # -----------------------------
    # Two-step sale: update stock, then log the transaction
    # -----------------------------
    print("\nRecording a sale the two-step way...")
    print(c.sell_two_step(coffee, 3))

    # -----------------------------
    # Single-call sale and restock
    # -----------------------------
    print("\nSelling 2 coffees...")
    print(c.sell(coffee["id"], 2))

    print("\nRestocking muffins...")
    print(c.restock(muffin["id"], 6))

    # -----------------------------
    # Reports
    # -----------------------------
    print("\nDashboard:")
    print(c.dashboard())

    print("\nSales report:")
    print(c.sales_report())

    print("\nStock report:")
    print(c.stock_report())

    print("\nRecent sales:")
    print(c.recent_sales())


if __name__ == "__main__":
    main()
