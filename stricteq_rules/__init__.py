"""
Strict-equality rules package.

Rules in this package are discovered by `stricteq.registry.discover_rules`,
which registers every entry of a module-level `RULES` list.

To add a new rule:
1. Create a Python file in this directory (e.g., my_rule.py)
2. Define your rule class implementing the Rule protocol
3. Create a RULES list containing your rule instance
"""
