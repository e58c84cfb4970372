# Path: acc_hier/process/__init__.py
"""
Process Layer for acc_hier

The PROCESS layer handles all validation operations:
- hierarchy/ - Account code parsing, level/parent resolution, forest building
- validation/ - Family classification-consistency checks
- reconciliation/ - Declared totals vs classified leaves
- revalidation/ - Retroactive re-validation of historical reports
- engine.py - One-report pipeline (ReportValidationEngine)
- settings.py - Typed thresholds (EngineSettings)

All components follow the IPO pattern:
- Read from INPUT layer (loaders)
- Process data (resolution, validation, reconciliation)
- Prepare for OUTPUT layer (formatters)

Import from the subpackages directly; the loaders depend on
process.hierarchy, so this package does not re-export anything.
"""
