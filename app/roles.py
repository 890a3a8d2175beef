"""
Role definitions - single source of truth for every role in the system.
Mirrors the `role` column values on the users table.

Only the permissions the API enforces are listed here; anything not listed is
treated as not granted.
"""

ALL_PERMISSIONS = {
    "viewAllJobs": True,
    "viewOwnJobs": True,
    "createJobs": True,
    "editJobs": True,
    "deleteJobs": True,
    "viewAllClients": True,
    "viewOwnClients": True,
    "createClients": True,
    "editClients": True,
    "viewStaffList": True,
    "viewReporting": True,
}

_STAFF_PERMISSIONS = {
    **ALL_PERMISSIONS,
    "deleteJobs": False,
    "viewReporting": False,
}

_CONTRACTOR_PERMISSIONS = {
    **{key: False for key in ALL_PERMISSIONS},
    "viewOwnJobs": True,
    "viewOwnClients": True,
}

ROLE_DEFINITIONS = {
    "owner": {
        "label": "Owner",
        "tier": "owner",
        "permissions": ALL_PERMISSIONS,
    },
    "business_owner": {
        "label": "Business Owner",
        "tier": "owner",
        "permissions": ALL_PERMISSIONS,
    },
    "finance": {
        "label": "Finance",
        "tier": "management",
        "permissions": {
            **ALL_PERMISSIONS,
            "createJobs": False,
            "editJobs": False,
            "deleteJobs": False,
            "createClients": False,
            "editClients": False,
        },
    },
    "staff": {"label": "Staff", "tier": "staff", "permissions": _STAFF_PERMISSIONS},
    "staff_no_material": {
        "label": "Staff (No Materials)",
        "tier": "staff",
        "permissions": _STAFF_PERMISSIONS,
    },
    "staff_no_pricing": {
        "label": "Staff (No Pricing)",
        "tier": "staff",
        "permissions": _STAFF_PERMISSIONS,
    },
    "staff_no_pricing_no_attachments": {
        "label": "Staff (No Pricing, No Attachments)",
        "tier": "staff",
        "permissions": _STAFF_PERMISSIONS,
    },
    "contractor": {
        "label": "Contractor",
        "tier": "contractor",
        "permissions": _CONTRACTOR_PERMISSIONS,
    },
    "strict_contractor": {
        "label": "Strict Contractor",
        "tier": "contractor",
        "permissions": _CONTRACTOR_PERMISSIONS,
    },
}


def is_valid_role(role: str) -> bool:
    return role in ROLE_DEFINITIONS


def has_permission(role: str, permission: str) -> bool:
    """Unknown roles and unknown permissions are never granted"""
    definition = ROLE_DEFINITIONS.get(role)
    if not definition:
        return False
    return definition["permissions"].get(permission, False)


def role_label(role: str) -> str:
    definition = ROLE_DEFINITIONS.get(role)
    return definition["label"] if definition else role
