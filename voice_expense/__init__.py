# -*- coding: utf-8 -*-
"""
Voice Expense Interpreter

Turns a spoken or typed sentence ("I spent 50 dirhams on groceries") into a
structured expense proposal, and decides when to auto-start a voice capture.

Usage:
    from voice_expense.parser import interpret
    expense = interpret("I paid 99.99 dollars at Amazon", "AED")
"""

__version__ = "1.0.0"
