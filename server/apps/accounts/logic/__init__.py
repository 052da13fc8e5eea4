"""Business logic layer for accounts app.

- Signup, login and account lookups
- Storage usage bookkeeping and plan changes
- The per-visitor session view over the current account
"""
