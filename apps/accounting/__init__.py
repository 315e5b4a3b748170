"""
Accounting App - VAT, Cost and Profit Engine

Computes purchase and sale totals under the Dutch VAT regimes used in the
used-car trade (21% BTW, margeregeling, geen BTW), serves live previews of
those totals and a financial overview over the stored records.

Architecture:
- Services: money helpers, VAT calculator, financial overview
- Views: preview and overview endpoints (back office)
- Management commands: recalculate_totals
"""
