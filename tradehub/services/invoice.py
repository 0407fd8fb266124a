"""
Invoice rendering. Pure functions of an order; nothing is stored or sent.
"""
from datetime import timedelta

from jinja2 import DictLoader, Environment, StrictUndefined, select_autoescape

from ..models.order import OrderDocument

CURRENCY_SYMBOL = "₦"
INVOICE_DUE_DAYS = 30
SEPARATOR = "-" * 80

TEMPLATES = {
    "invoice.html": r"""<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <title>Invoice #{{ order.order_number }}</title>
  <style>
    body { font-family: Arial, sans-serif; color: #333; margin: 0; padding: 20px; }
    .container { max-width: 800px; margin: 0 auto; border: 1px solid #ddd; padding: 30px; }
    .header { display: flex; justify-content: space-between; border-bottom: 2px solid #007bff; padding-bottom: 20px; }
    .company-info h1 { margin: 0; color: #007bff; }
    .invoice-info { text-align: right; }
    .invoice-no { font-size: 18px; font-weight: bold; color: #007bff; }
    .section-title { font-weight: bold; margin: 20px 0 10px; border-bottom: 1px solid #ddd; }
    .address-columns { display: grid; grid-template-columns: 1fr 1fr; gap: 20px; font-size: 12px; }
    table { width: 100%; border-collapse: collapse; margin: 20px 0; }
    th, td { padding: 10px; border-bottom: 1px solid #ddd; text-align: left; }
    .num { text-align: right; }
    .discount-row { color: #28a745; }
    .total-row { font-size: 16px; color: #007bff; border-top: 2px solid #007bff; }
    .payment-status { background-color: #fff3cd; padding: 10px; margin-top: 20px; font-size: 12px; }
    .footer { margin-top: 30px; font-size: 12px; color: #666; text-align: center; }
  </style>
</head>
<body>
  <div class="container">
    <div class="header">
      <div class="company-info">
        <h1>{{ company.name }}</h1>
        <p>{{ company.tagline }}</p>
        <p>{{ company.email }}</p>
        <p>{{ company.phone }}</p>
      </div>
      <div class="invoice-info">
        <p class="invoice-no">Invoice #{{ order.order_number }}</p>
        <p>Invoice Date: {{ invoice_date }}</p>
        <p>Due Date: {{ due_date }}</p>
      </div>
    </div>

    <div class="address-columns">
      <div>
        <div class="section-title">Bill To</div>
        <strong>{{ address.full_name }}</strong>
        <p>{{ address.address or "" }}</p>
        <p>{{ address.city or "" }}, {{ address.state or "" }} {{ address.zip_code or "" }}</p>
        <p>Email: {{ address.email or "" }}</p>
        <p>Phone: {{ address.phone or "" }}</p>
      </div>
      <div>
        <div class="section-title">Ship To</div>
        <strong>{{ address.full_name }}</strong>
        <p>{{ address.address or "" }}</p>
        <p>{{ address.city or "" }}, {{ address.state or "" }} {{ address.zip_code or "" }}</p>
        <p>Method: {{ order.shipping_method|title }}</p>
      </div>
    </div>

    <div class="section-title">Order Items</div>
    <table>
      <thead>
        <tr><th>Description</th><th class="num">Qty</th><th class="num">Price</th><th class="num">Amount</th></tr>
      </thead>
      <tbody>
        {%- for item in order.items %}
        <tr>
          <td>{{ item.name }}</td>
          <td class="num">{{ item.quantity }}</td>
          <td class="num">{{ item.price|money }}</td>
          <td class="num">{{ item.line_total|money }}</td>
        </tr>
        {%- endfor %}
      </tbody>
    </table>

    <table>
      <tr><td class="num">Subtotal:</td><td class="num">{{ order.subtotal|money }}</td></tr>
      {%- if order.discount %}
      <tr class="discount-row"><td class="num">{{ order.discount.code }} Discount:</td><td class="num">-{{ order.discount.discount_amount|money }}</td></tr>
      <tr><td class="num">Subtotal after discount:</td><td class="num">{{ subtotal_after_discount|money }}</td></tr>
      {%- endif %}
      <tr><td class="num">Shipping:</td><td class="num">{{ order.shipping|money }}</td></tr>
      <tr><td class="num">Tax ({{ tax_label }}):</td><td class="num">{{ order.tax|money }}</td></tr>
      <tr class="total-row"><td class="num">Total Due:</td><td class="num">{{ order.total|money }}</td></tr>
    </table>

    <div class="payment-status">
      <strong>Order Status:</strong> {{ order.status|title }}<br>
      <strong>Payment Method:</strong> OPay<br>
      Thank you for your order! Please proceed with payment to complete your purchase.
    </div>

    <div class="footer">
      <p>Thank you for shopping with {{ company.name }}!</p>
      <p>For questions about this invoice, contact {{ company.email }}</p>
      <p>This is an automatically generated invoice. No signature is required.</p>
    </div>
  </div>
</body>
</html>
""",
    "invoice.txt": r"""{{ sep }}
INVOICE #{{ order.order_number }}
{{ sep }}

INVOICE DATE: {{ invoice_date }}
DUE DATE: {{ due_date }}
ORDER NUMBER: {{ order.order_number }}

{{ sep }}
BILL TO:
{{ sep }}
{{ address.full_name }}
{{ address.address or "" }}
{{ address.city or "" }}, {{ address.state or "" }} {{ address.zip_code or "" }}
Email: {{ address.email or "" }}
Phone: {{ address.phone or "" }}

{{ sep }}
ORDER ITEMS:
{{ sep }}
{{ "%-36s %5s %16s %16s"|format("Description", "Qty", "Price", "Amount") }}
{{ sep }}
{% for item in order.items -%}
{{ "%-36s %5d %16s %16s"|format(item.name[:36], item.quantity, item.price|money, item.line_total|money) }}
{% endfor -%}
{{ sep }}
{{ "%-58s %16s"|format("SUBTOTAL:", order.subtotal|money) }}
{% if order.discount -%}
{{ "%-58s %16s"|format(order.discount.code ~ " DISCOUNT:", "-" ~ order.discount.discount_amount|money) }}
{{ "%-58s %16s"|format("SUBTOTAL AFTER DISCOUNT:", subtotal_after_discount|money) }}
{% endif -%}
{{ "%-58s %16s"|format("SHIPPING:", order.shipping|money) }}
{{ "%-58s %16s"|format("TAX (" ~ tax_label ~ "):", order.tax|money) }}
{{ sep }}
{{ "%-58s %16s"|format("TOTAL DUE:", order.total|money) }}
{{ sep }}

ORDER STATUS: {{ order.status|upper }}
PAYMENT METHOD: OPay

Thank you for your order!
For questions, contact {{ company.email }}

This is an automatically generated invoice.
""",
}

COMPANY = {
    "name": "TradeHub",
    "tagline": "Your trusted e-commerce platform",
    "email": "support@tradehub.com",
    "phone": "+234 (0) 123 456 7890",
}


def format_money(value: float) -> str:
    """₦2,500 for whole amounts, ₦187.50 otherwise."""
    value = float(value or 0)
    if value.is_integer():
        return f"{CURRENCY_SYMBOL}{int(value):,}"
    return f"{CURRENCY_SYMBOL}{value:,.2f}"


_env = Environment(
    loader=DictLoader(TEMPLATES),
    autoescape=select_autoescape(["html"]),
    undefined=StrictUndefined,
    keep_trailing_newline=True,
)
_env.filters["money"] = format_money


class InvoiceGenerator:
    """Renders an order as an HTML or plain-text invoice."""

    def __init__(self, tax_rate: float = 0.075, due_days: int = INVOICE_DUE_DAYS):
        self.tax_rate = tax_rate
        self.due_days = due_days

    def _context(self, order: OrderDocument) -> dict:
        discount = order.discount.discount_amount if order.discount else 0.0
        return {
            "order": order,
            "address": order.shipping_address,
            "company": COMPANY,
            "invoice_date": order.created_at.strftime("%Y-%m-%d"),
            "due_date": (order.created_at + timedelta(days=self.due_days)).strftime("%Y-%m-%d"),
            "subtotal_after_discount": order.subtotal - discount,
            "tax_label": f"{round(self.tax_rate * 100, 2):g}%",
            "sep": SEPARATOR,
        }

    def generate_html(self, order: OrderDocument) -> str:
        return _env.get_template("invoice.html").render(**self._context(order))

    def generate_plain_text(self, order: OrderDocument) -> str:
        return _env.get_template("invoice.txt").render(**self._context(order))
