# Path: acc_hier/__init__.py
"""
acc_hier - Account Hierarchy Engine

Infers a four-level tree over hyphen-delimited account codes, checks the
classification state of sibling and parent accounts for double counting,
and reconciles declared totals against classified leaves.

Layers:
- loaders/ - INPUT: report rows and the classification rule boundary
- process/ - PROCESS: hierarchy, validation, reconciliation, revalidation
- output/ - OUTPUT: JSON and text views of the results
- core/ - logging and errors
"""

__version__ = '0.1.0'
