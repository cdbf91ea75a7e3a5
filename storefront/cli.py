#!/usr/bin/env python3
"""
Flash Sale Storefront (terminal)

Usage:
    flash-sale-shop [--api-url URL] [--email EMAIL]

Commands:
    products            list the catalog
    add <id>            add one unit of a product to the cart
    remove <id>         drop a line item
    qty <id> <n>        set a quantity (0 or less removes the item)
    cart                show the cart with subtotal, tax and total
    checkout            place the order
    retry               reload the catalog
    help                show this list
    quit                exit
"""
import argparse
import logging
import os
import platform
import sys
from typing import List, Optional

from storefront.cart import Cart, SoldOutError
from storefront.client import (
    StorefrontClient, StorefrontError, DEFAULT_API_URL, DEFAULT_CUSTOMER_EMAIL
)
from storefront.models import Product

LOW_STOCK = 5

# --- Colors ---
class Colors:
    HEADER = '\033[95m'
    BLUE = '\033[94m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    WARNING = '\033[93m'
    FAIL = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'

if platform.system() == "Windows":
    os.system('color')

def stock_text(stock: int) -> str:
    if stock <= 0:
        return "SOLD OUT"
    if stock <= LOW_STOCK:
        return f"Only {stock} left!"
    return f"{stock} in stock"

def stock_color(stock: int) -> str:
    if stock <= LOW_STOCK:
        return Colors.FAIL
    if stock <= 15:
        return Colors.WARNING
    return Colors.GREEN

class Storefront:
    """Top-level session: owns the catalog snapshot and the cart."""

    def __init__(self, client: StorefrontClient, customer_email: str = DEFAULT_CUSTOMER_EMAIL, out=None):
        self.client = client
        self.customer_email = customer_email
        self.out = out or sys.stdout
        self.cart = Cart()
        self.products: List[Product] = []
        self.last_order_id: Optional[str] = None

    def log(self, msg: str, color: str = Colors.ENDC):
        print(f"{color}{msg}{Colors.ENDC}", file=self.out)

    # --- Catalog ---
    def load_products(self) -> bool:
        try:
            self.products = self.client.list_products()
        except StorefrontError:
            self.products = []
            self.log("Failed to load products. Please try again.", Colors.FAIL)
            return False
        return True

    def find_product(self, product_id: str) -> Optional[Product]:
        for product in self.products:
            if product.id == product_id:
                return product
        return None

    def show_products(self):
        if not self.products:
            self.log("No products available. Type 'retry' to reload.", Colors.WARNING)
            return
        best = max(p.discount for p in self.products)
        self.log(f"{len(self.products)} items available with up to {best}% discount", Colors.HEADER)
        for p in self.products:
            self.log(f"[{p.id}] {p.name}", Colors.BOLD)
            self.log(f"    ${p.price:.2f}  (was ${p.original_price:.2f}, -{p.discount}%)")
            self.log(f"    {stock_text(p.stock)}", stock_color(p.stock))

    # --- Cart ---
    def add(self, product_id: str):
        product = self.find_product(product_id)
        if not product:
            self.log(f"Unknown product: {product_id}", Colors.FAIL)
            return
        try:
            item = self.cart.add(product)
        except SoldOutError as e:
            self.log(str(e), Colors.FAIL)
            return
        self.log(f"Added {item.name} (x{item.quantity}). Cart: {self.cart.count}", Colors.GREEN)

    def remove(self, product_id: str):
        self.cart.remove(product_id)
        self.log(f"Cart: {self.cart.count}")

    def set_quantity(self, product_id: str, quantity: int):
        self.cart.set_quantity(product_id, quantity)
        self.show_cart()

    def show_cart(self):
        if self.cart.is_empty():
            self.log("Your Cart is Empty", Colors.WARNING)
            return
        for item in self.cart:
            self.log(f"[{item.id}] {item.name} x{item.quantity}  ${item.price * item.quantity:.2f}")
        self.log(f"Subtotal  ${self.cart.subtotal}")
        self.log(f"Tax (8%)  ${self.cart.tax}")
        self.log(f"Total     ${self.cart.total}", Colors.BOLD)

    # --- Checkout ---
    def checkout(self) -> Optional[str]:
        if self.cart.is_empty():
            self.log("Your cart is empty", Colors.FAIL)
            return None

        self.log("Processing your order...", Colors.CYAN)
        try:
            confirmation = self.client.create_order(self.cart, self.customer_email)
        except StorefrontError:
            self.log("Failed to process order. Please try again.", Colors.FAIL)
            return None

        self.cart.clear()
        self.last_order_id = confirmation.order_id
        self.log("Order Confirmed!", Colors.GREEN)
        self.log(f"Order ID: {confirmation.order_id}", Colors.BOLD)
        return confirmation.order_id

    # --- Dispatch ---
    def handle(self, line: str) -> bool:
        """Run one command. Returns False when the session should end."""
        parts = line.split()
        if not parts:
            return True
        command, args = parts[0].lower(), parts[1:]

        if command in ("quit", "exit"):
            return False
        elif command == "help":
            self.log(__doc__.split("Commands:")[1].rstrip())
        elif command == "products":
            self.show_products()
        elif command == "retry":
            if self.load_products():
                self.show_products()
        elif command == "cart":
            self.show_cart()
        elif command == "checkout":
            self.checkout()
        elif command == "add" and len(args) == 1:
            self.add(args[0])
        elif command == "remove" and len(args) == 1:
            self.remove(args[0])
        elif command == "qty" and len(args) == 2:
            try:
                quantity = int(args[1])
            except ValueError:
                self.log(f"Not a number: {args[1]}", Colors.FAIL)
                return True
            self.set_quantity(args[0], quantity)
        else:
            self.log(f"Unknown command: {line.strip()} (type 'help')", Colors.WARNING)
        return True

    def run(self, stdin=None):
        stdin = stdin or sys.stdin
        self.log("\n⚡ FLASH SALE ⚡", Colors.HEADER)
        if self.load_products():
            self.show_products()
        while True:
            print("> ", end="", flush=True, file=self.out)
            line = stdin.readline()
            if not line or not self.handle(line):
                break

def main(argv=None):
    parser = argparse.ArgumentParser(description="Flash sale storefront")
    parser.add_argument("--api-url", default=DEFAULT_API_URL, help="Base URL of the flash sale service")
    parser.add_argument("--email", default=DEFAULT_CUSTOMER_EMAIL, help="Customer email sent with orders")
    parser.add_argument("--verbose", action="store_true", help="Log HTTP failures")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO if args.verbose else logging.ERROR)

    with StorefrontClient(args.api_url) as client:
        Storefront(client, customer_email=args.email).run()

if __name__ == "__main__":
    main()
