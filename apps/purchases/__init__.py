"""
Purchases App - Vehicle Acquisition Records

Records what the dealership paid for each vehicle: net price, VAT regime,
BPM registration tax and itemized acquisition costs. VAT and the grand
total are always computed by the accounting calculator.

Architecture:
- Models: PurchaseRecord
- Services: PurchaseService
- Views: back-office API with CSV export
"""
