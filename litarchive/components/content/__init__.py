"""
Content catalogue component - admin CRUD and public read access.
"""

from .component import (
    EDITABLE_FIELDS,
    clamp_page,
    insert_new_item,
    make_excerpt,
    run_create,
    run_delete,
    run_get_admin,
    run_get_public,
    run_list_admin,
    run_list_public,
    run_set_featured,
    run_update,
)
from .models import (
    ContentListOutput,
    ContentOutput,
    CreateContentInput,
    DeleteContentInput,
    GetAdminContentInput,
    GetPublicContentInput,
    ListAdminContentInput,
    ListPublicContentInput,
    SetFeaturedInput,
    UpdateContentInput,
)
from .ports import ContentStorePort, PolicyPort, TimePort

__all__ = [
    # Component functions
    "run_create",
    "run_update",
    "run_set_featured",
    "run_delete",
    "run_get_admin",
    "run_list_admin",
    "run_get_public",
    "run_list_public",
    "insert_new_item",
    "clamp_page",
    "make_excerpt",
    "EDITABLE_FIELDS",
    # Models
    "CreateContentInput",
    "UpdateContentInput",
    "SetFeaturedInput",
    "DeleteContentInput",
    "GetAdminContentInput",
    "GetPublicContentInput",
    "ListPublicContentInput",
    "ListAdminContentInput",
    "ContentOutput",
    "ContentListOutput",
    # Ports
    "ContentStorePort",
    "PolicyPort",
    "TimePort",
]
