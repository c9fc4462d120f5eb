import asyncio

from sdk.inventory_client import InventoryClient


async def simulate_sale(client, till, product_id, qty):
    r = await client.sell_async(product_id, qty)
    if r.status_code == 200:
        body = r.json()
        print(f"✅ {till} sold {qty} units "
              f"(Transaction ID: {body['transaction']['id']}, Amount: {body['transaction']['amount']})")
    elif r.status_code == 409:
        print(f"❌ {till} sale refused: not enough stock.")
    elif r.status_code == 404:
        print(f"❌ {till} sale failed: product not found.")
    else:
        print(f"⚠️  {till} unexpected response {r.status_code}: {r.text}")


async def main():
    c = InventoryClient()
    c.reset()

    product = c.create_product("Cheesecake Slice", 4.25, 5, "Bakery")
    product_id = product["id"]
    print(f"\n🍰 Added product: {product}")

    # Five tills each try to sell 2 of the 5 slices at once.
    print("\n⚡ Simulating concurrent sales...")
    await asyncio.gather(*[
        simulate_sale(c, f"till-{i}", product_id, 2) for i in range(1, 6)
    ])

    print("\n📦 Final product state:", c.get_product(product_id))
    print("📈 Sales report:", c.sales_report())


if __name__ == "__main__":
    asyncio.run(main())
