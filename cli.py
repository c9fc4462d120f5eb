# Interactive terminal dashboard for the café inventory
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

import requests

from inventory.reports import is_low_stock, sold_units_by_product, LOW_STOCK, OUT_OF_STOCK
from sdk.inventory_client import InventoryClient

console = Console()
c = InventoryClient()

CURRENCY = "R"

status_message = "Ready"
product_cache: List[Dict[str, Any]] = []

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


def _money(value: Any) -> str:
    return f"{CURRENCY}{float(value or 0):.2f}"


def _error_text(e: Exception) -> str:
    """Prefer the API's {"error": ...} body over the raw exception text."""
    if isinstance(e, requests.exceptions.HTTPError) and e.response is not None:
        try:
            return e.response.json().get("error", str(e))
        except ValueError:
            return str(e)
    return str(e)


# ---------------------------
# Display helpers
# ---------------------------
def _status_style(status: str) -> str:
    if status == OUT_OF_STOCK:
        return "bold red"
    if status == LOW_STOCK:
        return "yellow"
    return "green"


def show_products(products: List[Dict[str, Any]]):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title=f"☕ Current Products ({len(products)})",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=14)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Category", width=15)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Qty", justify="right", width=8)

    for p in products:
        qty = int(p.get("quantity") or 0)
        qty_text = f"[yellow]{qty}[/yellow]" if is_low_stock(p) else str(qty)
        table.add_row(
            str(p.get("id", "N/A")),
            p.get("name") or "N/A",
            p.get("category") or "",
            _money(p.get("price")),
            qty_text
        )
    console.print(table)


def show_menu_board(products: List[Dict[str, Any]], transactions: List[Dict[str, Any]]):
    if not products:
        console.print("[italic yellow]The menu is empty[/italic yellow]")
        return

    sold = sold_units_by_product(transactions)
    table = Table(title="📋 Current Menu", box=box.ROUNDED, header_style="bold cyan", show_lines=True)
    table.add_column("Item", style="bold", width=20)
    table.add_column("Description", width=30)
    table.add_column("Category", width=12)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Available", justify="right", width=16)

    for p in products:
        qty = int(p.get("quantity") or 0)
        available = str(qty)
        if sold.get(p.get("id"), 0) > 0:
            available += f" [dim](Sold: {sold[p.get('id')]})[/dim]"
        table.add_row(
            p.get("name") or "",
            p.get("description") or "",
            p.get("category") or "",
            _money(p.get("price")),
            available
        )
    console.print(table)


def show_low_stock(products: List[Dict[str, Any]]):
    if not products:
        console.print(Panel.fit("[green]All items are well stocked[/green]", title="Low Stock Alert"))
        return
    lines = [f"[yellow]{p.get('name')}[/yellow] - Only {p.get('quantity', 0)} remaining" for p in products]
    console.print(Panel.fit("\n".join(lines), title="⚠️ Low Stock Alert", border_style="yellow"))


def show_stock_report(rows: List[Dict[str, Any]]):
    if not rows:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(title="📦 Current Inventory", box=box.ROUNDED, header_style="bold blue", show_lines=True)
    table.add_column("Product", style="bold", width=20)
    table.add_column("Category", width=15)
    table.add_column("Current Stock", justify="right", width=14)
    table.add_column("Sold", justify="right", width=8)
    table.add_column("Status", width=14)

    for row in rows:
        style = _status_style(row["status"])
        table.add_row(
            row.get("name") or "",
            row.get("category") or "",
            str(row["quantity"]),
            str(row["sold"]),
            f"[{style}]{row['status']}[/{style}]"
        )
    console.print(table)


def show_recent_sales(sales: List[Dict[str, Any]]):
    if not sales:
        console.print("[italic yellow]No sales recorded yet[/italic yellow]")
        return

    table = Table(title="🧾 Recent Sales", box=box.ROUNDED, header_style="bold yellow", show_lines=True)
    table.add_column("Product", style="bold", width=20)
    table.add_column("Quantity", justify="right", width=10)
    table.add_column("Amount", justify="right", width=12)
    table.add_column("Time", width=10)

    for sale in sales:
        try:
            when = datetime.fromisoformat(sale["date"].replace("Z", "+00:00")).astimezone().strftime("%H:%M:%S")
        except (KeyError, AttributeError, ValueError):
            when = "-"
        table.add_row(
            sale.get("productName") or "",
            str(sale.get("quantityChanged", 0)),
            _money(sale.get("amount")),
            when
        )
    console.print(table)


def show_sales_report(report: Dict[str, Any]):
    grid = Table.grid(padding=(0, 4))
    grid.add_column()
    grid.add_column()
    grid.add_column()
    grid.add_row(
        f"[bold]Total Sales Value[/bold]\n[green]{_money(report.get('totalSales'))}[/green]",
        f"[bold]Total Items Sold[/bold]\n{report.get('totalItemsSold', 0)}",
        f"[bold]Total Transactions[/bold]\n{report.get('totalTransactions', 0)}",
    )
    console.print(Panel(grid, title="📈 Sales Reports", border_style="green"))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper with error reporting
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    Returns the decoded result, or None after printing the error.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)

        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except requests.exceptions.RequestException as e:
        status_message = f"Error: {_error_text(e)}"
        console.print(show_status(status_message, False))
        return None


# ---------------------------
# Input helpers with autocomplete
# ---------------------------
def get_product_completer():
    names = [p.get("name", "") for p in product_cache]
    ids = [str(p.get("id", "")) for p in product_cache]
    return WordCompleter([n for n in (names + ids) if n], ignore_case=True)


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: float = 0.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def pick_product() -> Optional[Dict[str, Any]]:
    """Resolve a product by id or (case-insensitive) name from the cache."""
    choice = prompt_with_autocomplete("Select product (name or ID)", completer=get_product_completer()).strip()
    for p in product_cache:
        if str(p.get("id")) == choice or (p.get("name") or "").lower() == choice.lower():
            return p
    console.print(show_status("Please select a product", False))
    return None


def refresh_products():
    global product_cache
    product_cache = try_api(c.list_products) or []
    return product_cache


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "☕ Wings Cafe",
        "[bold blue]Inventory Dashboard[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Menu actions
# ---------------------------
def action_dashboard():
    products = refresh_products()
    transactions = try_api(c.list_transactions) or []
    summary = try_api(c.dashboard)
    if summary:
        console.print(Panel.fit(
            f"Products: [bold]{summary['totalProducts']}[/bold]   "
            f"Low stock: [bold yellow]{summary['lowStockItems']}[/bold yellow]",
            title="Dashboard"
        ))
    show_menu_board(products, transactions)
    show_low_stock([p for p in products if is_low_stock(p)])


def action_add_product():
    name = prompt_with_autocomplete("Product name").strip()
    if not name:
        console.print(show_status("Product name is required", False))
        return
    description = prompt_with_autocomplete("Description")
    category = prompt_with_autocomplete("Category")
    price = ask_float("💰 Price", default=0.0)
    qty = IntPrompt.ask("📦 Quantity", default=0)
    resp = try_api(c.create_product, name, price, qty, category, description,
                   success_msg="Product added successfully!")
    if resp:
        refresh_products()


def action_edit_product():
    product = pick_product()
    if not product:
        return
    name = prompt_with_autocomplete("Product name", default=product.get("name") or "")
    description = prompt_with_autocomplete("Description", default=product.get("description") or "")
    category = prompt_with_autocomplete("Category", default=product.get("category") or "")
    price = ask_float("💰 Price", default=float(product.get("price") or 0))
    qty = IntPrompt.ask("📦 Quantity", default=int(product.get("quantity") or 0))
    resp = try_api(c.update_product, product["id"], name=name, description=description,
                   category=category, price=price, quantity=qty,
                   success_msg="Product updated successfully!")
    if resp:
        refresh_products()


def action_delete_product():
    product = pick_product()
    if not product:
        return
    if Confirm.ask(f"Are you sure you want to delete '{product.get('name')}'?"):
        resp = try_api(c.delete_product, product["id"], success_msg="Product deleted!")
        if resp:
            refresh_products()


def action_record_sale():
    product = pick_product()
    if not product:
        return
    qty = IntPrompt.ask("Quantity", default=1)
    if qty <= 0:
        console.print(show_status("Quantity must be at least 1", False))
        return
    if int(product.get("quantity") or 0) < qty:
        console.print(show_status("Not enough stock!", False))
        return
    resp = try_api(c.sell, product["id"], qty, success_msg="Sale recorded successfully!")
    if resp:
        refresh_products()
        show_recent_sales(try_api(c.recent_sales) or [])


def action_add_stock():
    product = pick_product()
    if not product:
        return
    qty = IntPrompt.ask(f"Quantity to add (current: {product.get('quantity', 0)})", default=1)
    if qty <= 0:
        console.print(show_status("Please enter a quantity to add", False))
        return
    resp = try_api(c.restock, product["id"], qty, success_msg="Stock added successfully!")
    if resp:
        refresh_products()


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message

    console.clear()
    console.print(create_header())
    refresh_products()

    actions = {
        "1": action_dashboard,
        "2": lambda: show_products(refresh_products()),
        "3": action_add_product,
        "4": action_edit_product,
        "5": action_delete_product,
        "6": action_record_sale,
        "7": action_add_stock,
        "8": lambda: show_recent_sales(try_api(c.recent_sales) or []),
        "9": lambda: show_stock_report(try_api(c.stock_report) or []),
        "10": lambda: show_sales_report(try_api(c.sales_report) or {}),
    }

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📋 Dashboard", "6", "💵 Record sale"),
            ("2", "☕ List products", "7", "📦 Add stock"),
            ("3", "➕ Add product", "8", "🧾 Recent sales"),
            ("4", "✏️ Edit product", "9", "📊 Inventory status"),
            ("5", "🗑️ Delete product", "10", "📈 Sales report"),
            ("", "", "q", "👋 Quit")
        ]
        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter(list(actions) + ["q", "quit", "exit"])
        ).strip()

        if choice in actions:
            actions[choice]()
        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Goodbye from Wings Cafe! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


def main():
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
