# Path: tests/helpers.py
"""
Builders for accounts and classification states used across test modules.
"""

from acc_hier.loaders.rule_manager import ClassificationState
from acc_hier.process.hierarchy.account_code import Account


def make_account(code, amount=0, concept=None) -> Account:
    """Build an Account from a code and a signed amount."""
    return Account.from_code(code, concept if concept is not None else f"Cuenta {code}", amount)


def make_accounts(*rows) -> list[Account]:
    """Build accounts from (code, amount) or (code, amount, concept) tuples."""
    return [make_account(*row) for row in rows]


def egresos(categoria='Gastos Operativos', sub='Servicios') -> ClassificationState:
    """Fully classified expense state."""
    return ClassificationState(
        tipo='Egresos',
        categoria_1=categoria,
        sub_categoria=sub,
        clasificacion='Operativo',
    )


def ingresos(categoria='Ventas', sub='Nacionales') -> ClassificationState:
    """Fully classified revenue state."""
    return ClassificationState(
        tipo='Ingresos',
        categoria_1=categoria,
        sub_categoria=sub,
        clasificacion='Operativo',
    )
