"""
Printable receipt (80mm thermal) and invoice (8.5" x 11" letter) documents.

Both builders return a complete HTML document for the browser to print. Every
piece of user-supplied text goes through escape_html. Amounts come precomputed
on the transaction (integer cents); nothing is recalculated here.
"""

from typing import Optional

from ...config import DEFAULT_BUSINESS_ADDRESS, DEFAULT_BUSINESS_PHONE
from ...utils.formatting import (
    format_display_date,
    format_money,
    format_receipt_datetime,
    normalize_tax_label,
)
from ...utils.sanitization import escape_html
from .schemas import LineItemResponse, TransactionResponse

DEFAULT_RECEIPT_FOOTER = "Thank you for your business."

RECEIPT_ROW_STYLE = "display:flex;justify-content:space-between"

INVOICE_STYLES = """
    @page { size: letter; margin: 0.5in; }
    body { font-family: system-ui, -apple-system, sans-serif; color: #0f172a; margin: 0; }
    .invoice-page { max-width: 7.5in; margin: 0 auto; padding: 24px; }
    .invoice-header { display: flex; justify-content: space-between; border-bottom: 2px solid #e2e8f0; padding-bottom: 16px; }
    .business-brand { display: flex; align-items: center; gap: 12px; }
    .invoice-logo { width: 48px; height: 48px; object-fit: contain; }
    .business-name { font-size: 1.4rem; margin: 0; }
    .business-contact { margin: 2px 0; color: #64748b; font-size: 0.9rem; }
    .invoice-title { font-size: 1.6rem; letter-spacing: 0.1em; margin: 0 0 8px; text-align: right; }
    .invoice-meta { margin: 2px 0; text-align: right; font-size: 0.9rem; }
    .section-label { font-size: 0.75rem; text-transform: uppercase; color: #64748b; margin: 24px 0 4px; }
    .customer-name { margin: 0; font-weight: 600; }
    .line-items { width: 100%; border-collapse: collapse; margin-top: 24px; }
    .line-items th { text-align: left; border-bottom: 1px solid #e2e8f0; padding: 8px 4px; font-size: 0.8rem; color: #64748b; }
    .line-items td { padding: 8px 4px; border-bottom: 1px solid #f1f5f9; }
    .item-qty, .item-price, .item-total, .col-qty, .col-price, .col-total { text-align: right; }
    .totals-block { margin-left: auto; width: 260px; margin-top: 16px; }
    .totals-row { display: flex; justify-content: space-between; padding: 4px 0; }
    .total-due { font-weight: 700; border-top: 2px solid #0f172a; margin-top: 4px; padding-top: 8px; }
    .notes { margin-top: 24px; font-size: 0.9rem; }
    .payment-method-list { display: flex; gap: 8px; flex-wrap: wrap; }
    .payment-pill { border: 1px solid #e2e8f0; border-radius: 999px; padding: 4px 12px; font-size: 0.85rem; }
    .invoice-footer { margin-top: 32px; text-align: center; color: #64748b; font-size: 0.8rem; }
"""

ACCEPTED_PAYMENT_METHODS = ("Stripe", "ATH Móvil", "PayPal", "VISA", "Cash")


def _receipt_row(label: str, amount: str, extra_style: str = "") -> str:
    return (
        f'<div style="{RECEIPT_ROW_STYLE}{extra_style}">'
        f"<span>{label}</span><span>{amount}</span></div>"
    )


def build_receipt_body_html(
    transaction: TransactionResponse,
    line_items: list[LineItemResponse],
    business_name: str,
    display_id: str,
    header_text: Optional[str] = None,
    footer_text: Optional[str] = None,
) -> str:
    header = (
        f'<div style="margin-top:4px;white-space:pre-wrap">{escape_html(header_text)}</div>'
        if header_text
        else ""
    )
    rows = "".join(
        f'<tr><td style="padding:2px 0">{escape_html(item.name)} x{item.quantity}</td>'
        f'<td style="text-align:right">{format_money(item.line_total)}</td></tr>'
        for item in line_items
    )

    totals = [_receipt_row("Subtotal", format_money(transaction.subtotal))]
    if transaction.discount_amount > 0:
        totals.append(_receipt_row("Discount", f"-{format_money(transaction.discount_amount)}"))
    for tax in transaction.tax_snapshot or []:
        totals.append(_receipt_row(escape_html(tax.label), format_money(tax.amount), ";margin-top:2px"))
    if transaction.tip_amount > 0:
        totals.append(_receipt_row("Tip", format_money(transaction.tip_amount)))
    totals.append(
        _receipt_row("TOTAL", format_money(transaction.total), ";font-weight:bold;margin-top:4px")
    )
    totals_html = "".join(totals)

    return f"""<div style="width:80mm;margin:0 auto;padding:8px;font-family:monospace;font-size:12px">
  <div style="text-align:center;margin-bottom:8px;border-bottom:1px dashed #000;padding-bottom:8px">
    <div style="font-weight:bold;font-size:14px">{escape_html(business_name)}</div>
    {header}
  </div>
  <div style="margin-bottom:8px">
    <div>{escape_html(display_id)}</div>
    <div>{escape_html(format_receipt_datetime(transaction.created_at))}</div>
  </div>
  <table style="width:100%;border-collapse:collapse;margin-bottom:8px"><tbody>
    {rows}
  </tbody></table>
  <div style="border-top:1px dashed #000;padding-top:8px;margin-bottom:8px">
    {totals_html}
  </div>
  <div style="text-align:center;font-size:10px;border-top:1px dashed #000;padding-top:8px;white-space:pre-wrap">{escape_html(footer_text or DEFAULT_RECEIPT_FOOTER)}</div>
</div>"""


def build_receipt_html(
    transaction: TransactionResponse,
    line_items: list[LineItemResponse],
    business_name: str,
    display_id: str,
    header_text: Optional[str] = None,
    footer_text: Optional[str] = None,
) -> str:
    body = build_receipt_body_html(
        transaction, line_items, business_name, display_id, header_text, footer_text
    )
    return f"""<!DOCTYPE html>
<html>
<head>
  <title>Receipt {escape_html(display_id)}</title>
  <meta charset="utf-8">
  <style>
    html, body {{ margin: 0; padding: 0; min-height: 100%; min-width: 100%; box-sizing: border-box; }}
    body {{ padding: 16px; font-family: monospace; font-size: 14px; }}
    #receipt-content {{ width: 80mm; max-width: 80mm; margin: 0 auto; min-height: 400px; }}
    @media print {{ body {{ width: 80mm; margin: 0; padding: 8px; }} #receipt-content {{ min-height: auto; }} }}
  </style>
</head>
<body>
  <div id="receipt-content">{body}</div>
</body>
</html>"""


def build_invoice_body_html(
    transaction: TransactionResponse,
    line_items: list[LineItemResponse],
    business_name: str,
    display_id: str,
    customer_name: str,
    business_phone: Optional[str] = None,
    business_address: Optional[str] = None,
    logo_url: Optional[str] = None,
) -> str:
    phone = business_phone or DEFAULT_BUSINESS_PHONE
    address = business_address or DEFAULT_BUSINESS_ADDRESS

    rows = "".join(
        f"""<tr>
          <td class="item-desc">{escape_html(item.name)}</td>
          <td class="item-qty">{item.quantity}</td>
          <td class="item-price">{format_money(item.unit_price)}</td>
          <td class="item-total">{format_money(item.line_total)}</td>
        </tr>"""
        for item in line_items
    )
    logo_img = f'<img src="{escape_html(logo_url)}" alt="" class="invoice-logo" />' if logo_url else ""

    totals = [
        f'<div class="totals-row"><span>Subtotal</span><span>{format_money(transaction.subtotal)}</span></div>'
    ]
    if transaction.discount_amount > 0:
        totals.append(
            f'<div class="totals-row"><span>Discount</span><span>-{format_money(transaction.discount_amount)}</span></div>'
        )
    for tax in transaction.tax_snapshot or []:
        totals.append(
            f'<div class="totals-row"><span>{escape_html(normalize_tax_label(tax.label))}</span>'
            f"<span>{format_money(tax.amount)}</span></div>"
        )
    if transaction.tip_amount > 0:
        totals.append(
            f'<div class="totals-row"><span>Tip</span><span>{format_money(transaction.tip_amount)}</span></div>'
        )
    totals.append(
        f'<div class="totals-row total-due"><span>Total</span><span>{format_money(transaction.total)}</span></div>'
    )
    totals_html = "".join(totals)

    notes = (
        f'<div class="notes"><strong>Notes:</strong> {escape_html(transaction.notes)}</div>'
        if transaction.notes
        else ""
    )
    payment_pills = "".join(
        f'<span class="payment-pill">{escape_html(method)}</span>' for method in ACCEPTED_PAYMENT_METHODS
    )

    return f"""
  <div class="invoice-page">
    <header class="invoice-header">
      <div class="business-block">
        <div class="business-brand">
          {logo_img}
          <h1 class="business-name">{escape_html(business_name)}</h1>
        </div>
        <p class="business-contact">{escape_html(phone)}</p>
        <p class="business-contact">{escape_html(address)}</p>
      </div>
      <div class="invoice-title-block">
        <h2 class="invoice-title">INVOICE</h2>
        <p class="invoice-meta"><strong>Invoice #</strong> {escape_html(display_id)}</p>
        <p class="invoice-meta"><strong>Date</strong> {escape_html(format_display_date(transaction.created_at))}</p>
      </div>
    </header>

    <section class="bill-to">
      <h3 class="section-label">Bill to</h3>
      <p class="customer-name">{escape_html(customer_name)}</p>
    </section>

    <table class="line-items">
      <thead>
        <tr>
          <th class="col-desc">Description</th>
          <th class="col-qty">Qty</th>
          <th class="col-price">Unit Price</th>
          <th class="col-total">Amount</th>
        </tr>
      </thead>
      <tbody>{rows}</tbody>
    </table>

    <div class="totals-block">
      {totals_html}
    </div>

    {notes}

    <section class="payment-methods">
      <h3 class="section-label">Payment methods</h3>
      <div class="payment-method-list">{payment_pills}</div>
    </section>

    <footer class="invoice-footer">
      <p class="powered-by">{escape_html(business_name)} &middot; Pet Hub</p>
    </footer>
  </div>"""


def build_invoice_html(
    transaction: TransactionResponse,
    line_items: list[LineItemResponse],
    business_name: str,
    display_id: str,
    customer_name: str,
    business_phone: Optional[str] = None,
    business_address: Optional[str] = None,
    logo_url: Optional[str] = None,
) -> str:
    body = build_invoice_body_html(
        transaction,
        line_items,
        business_name,
        display_id,
        customer_name,
        business_phone,
        business_address,
        logo_url,
    )
    return f"""<!DOCTYPE html>
<html>
<head>
  <title>Invoice {escape_html(display_id)}</title>
  <meta charset="utf-8">
  <style>{INVOICE_STYLES}</style>
</head>
<body>{body}</body>
</html>"""
