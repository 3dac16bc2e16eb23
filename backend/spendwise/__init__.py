"""
Spendwise: expense tracking with spending analytics.
"""
