"""Closed permission schema.

A permission set maps every module to a flat ``action -> bool`` mapping.
Modules and actions are fixed here; stored data is never allowed to add
new ones. Permission strings on the wire look like ``"employees.create"``.
"""

from collections.abc import Mapping

from pontual.domain.value_objects import PermissionModule

PermissionSet = dict[str, dict[str, bool]]

PERMISSION_SCHEMA: dict[PermissionModule, tuple[str, ...]] = {
    PermissionModule.ATTENDANCE: (
        "view",
        "mark",
        "edit",
        "search",
        "reset",
        "viewHistory",
        "editHistory",
    ),
    PermissionModule.EMPLOYEES: ("view", "create", "edit", "delete", "import"),
    PermissionModule.REPORTS: ("view", "generate", "exportExcel", "exportPDF"),
    PermissionModule.FINANCIAL: (
        "view",
        "viewPayments",
        "editRate",
        "editBonus",
        "delete",
        "clear",
        "applyBonus",
        "removeBonus",
        "removeBonusBulk",
    ),
    PermissionModule.C6PAYMENT: ("view", "generate", "export"),
    PermissionModule.ERRORS: ("view", "create", "edit", "delete", "viewStats"),
    PermissionModule.SETTINGS: ("view", "editDailyRate", "editOther"),
    PermissionModule.USERS: ("view", "create", "delete", "managePermissions"),
    PermissionModule.DATAMANAGEMENT: (
        "view",
        "viewStats",
        "configRetention",
        "manualCleanup",
        "autoCleanup",
    ),
}


def all_permission_keys() -> list[str]:
    """Every ``module.action`` string the schema defines, in schema order."""
    return [
        f"{module.value}.{action}"
        for module, actions in PERMISSION_SCHEMA.items()
        for action in actions
    ]


def schema_violation(permissions: object) -> str | None:
    """First reason ``permissions`` is not a (possibly partial) permission set.

    Modules and actions must come from ``PERMISSION_SCHEMA`` and every value
    must be a real ``bool``. Returns None for a valid set.
    """
    if not isinstance(permissions, Mapping):
        return "Permissões devem mapear módulo -> ação -> booleano"
    for module, actions in permissions.items():
        known = PERMISSION_SCHEMA.get(module) if isinstance(module, str) else None
        if known is None:
            return f"Módulo desconhecido: {module}"
        if not isinstance(actions, Mapping):
            return f"Permissões do módulo {module} devem mapear ação -> booleano"
        for action, value in actions.items():
            if action not in known:
                return f"Ação desconhecida: {module}.{action}"
            if not isinstance(value, bool):
                return f"Valor não booleano em {module}.{action}"
    return None


PERMISSION_LABELS: dict[str, dict[str, str]] = {
    "attendance": {
        "title": "Ponto",
        "view": "Ver aba",
        "mark": "Marcar presença",
        "edit": "Editar horário de saída",
        "search": "Buscar histórico",
        "reset": "Resetar registros de ponto",
        "viewHistory": "Visualizar dias anteriores",
        "editHistory": "Editar registros de dias anteriores",
    },
    "employees": {
        "title": "Funcionários",
        "view": "Ver aba",
        "create": "Criar funcionário",
        "edit": "Editar funcionário",
        "delete": "Excluir funcionário",
        "import": "Importar planilha",
    },
    "reports": {
        "title": "Relatórios",
        "view": "Ver aba",
        "generate": "Gerar relatórios",
        "exportExcel": "Exportar Excel",
        "exportPDF": "Exportar PDF",
    },
    "financial": {
        "title": "Financeiro",
        "view": "Ver aba",
        "viewPayments": "Visualizar pagamentos",
        "editRate": "Editar taxa diária",
        "editBonus": "Editar bônus",
        "delete": "Excluir pagamentos",
        "clear": "Limpar período",
        "applyBonus": "Aplicar bonificação",
        "removeBonus": "Remover bonificação individual",
        "removeBonusBulk": "Remover todas bonificações de um dia",
    },
    "c6payment": {
        "title": "Pagamento C6",
        "view": "Ver aba",
        "generate": "Gerar arquivo",
        "export": "Exportar",
    },
    "errors": {
        "title": "Erros",
        "view": "Ver aba",
        "create": "Criar registro",
        "edit": "Editar",
        "delete": "Excluir",
        "viewStats": "Ver estatísticas",
    },
    "settings": {
        "title": "Configurações",
        "view": "Ver aba",
        "editDailyRate": "Editar taxa diária padrão",
        "editOther": "Outras configurações",
    },
    "users": {
        "title": "Usuários",
        "view": "Ver aba",
        "create": "Criar supervisor",
        "delete": "Excluir supervisor",
        "managePermissions": "Gerenciar permissões",
    },
    "datamanagement": {
        "title": "Gerenciamento de Dados",
        "view": "Ver aba",
        "viewStats": "Ver estatísticas",
        "configRetention": "Configurar retenção",
        "manualCleanup": "Limpar dados manualmente",
        "autoCleanup": "Configurar limpeza automática",
    },
}
