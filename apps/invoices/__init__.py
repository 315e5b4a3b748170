"""
Invoices App - Invoice Documents

Builds the content of purchase and sale invoices (company block, party,
vehicle, line items and totals) from stored records. Rendering to PDF or
HTML is left to the client.
"""
