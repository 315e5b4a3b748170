"""
Sales App - Vehicle Sale Records

Records the sale of a vehicle to a customer. VAT, the gross and final price
and, when the vehicle's purchase is known, the profit are computed by the
accounting calculator. Recording a sale marks the vehicle as sold.

Architecture:
- Models: SaleRecord
- Services: SaleService
- Views: back-office API with CSV export
"""
