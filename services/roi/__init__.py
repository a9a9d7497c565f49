"""ROI calculator: content-production investment funded from the marketing budget.

- assumptions.py: Inputs/Scenario, default configuration, boundary validation
- engine.py: pure compute() over the budget waterfall and upside scenarios
- cli.py: compute from defaults or a JSON file
"""
