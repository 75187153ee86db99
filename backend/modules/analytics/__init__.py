# backend/modules/analytics/__init__.py

"""
Analytics Module - Loyalty Program Reporting

Key Features:
- Loyalty ROI with reward cost, COGS estimate and net profit
- Monthly revenue breakdown
- Customer behavior (new vs. returning, points earned and redeemed)
"""
