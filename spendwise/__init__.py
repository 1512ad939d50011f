"""
Spendwise - Source Package

A personal expense tracker: receipt scanning with Gemini, budgets,
recurring expenses, savings goals and spending reports.

DESIGN PRINCIPLES:
1. AI proposes, validated code decides what is stored
2. Derived state (due expenses, notifications) is recomputed, never guessed
3. Money is exact to the cent
4. Every write is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Spendwise Team"
