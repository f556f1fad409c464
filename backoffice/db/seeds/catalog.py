"""Default permission catalog and system role definitions."""

DEFAULT_PERMISSIONS = [
    # Dashboard & Analytics
    ("view_dashboard", "View Dashboard", "Access to main dashboard", "Dashboard"),
    ("view_analytics", "View Analytics", "Access to analytics and insights", "Dashboard"),
    # Reports
    ("view_reports", "View Reports", "Access to view reports", "Reports"),
    ("export_data", "Export Data", "Export data to CSV/Excel", "Reports"),
    # Products
    ("view_products", "View Products", "View product listings", "Products"),
    ("create_products", "Create Products", "Create new products", "Products"),
    ("edit_products", "Edit Products", "Edit existing products", "Products"),
    ("delete_products", "Delete Products", "Delete products", "Products"),
    ("manage_product_categories", "Manage Categories", "Manage product categories", "Products"),
    ("manage_product_brands", "Manage Brands", "Manage product brands", "Products"),
    # Orders
    ("view_orders", "View Orders", "View order listings", "Orders"),
    ("create_orders", "Create Orders", "Create new orders", "Orders"),
    ("edit_orders", "Edit Orders", "Edit existing orders", "Orders"),
    ("delete_orders", "Delete Orders", "Delete orders", "Orders"),
    ("process_orders", "Process Orders", "Process and fulfill orders", "Orders"),
    # Users
    ("view_users", "View Users", "View user listings", "Users"),
    ("create_users", "Create Users", "Create new users", "Users"),
    ("edit_users", "Edit Users", "Edit existing users", "Users"),
    ("delete_users", "Delete Users", "Delete users", "Users"),
    ("manage_user_roles", "Manage User Roles", "Assign roles to users", "Users"),
    # Inventory & Suppliers
    ("view_inventory", "View Inventory", "View inventory levels", "Inventory"),
    ("manage_inventory", "Manage Inventory", "Update inventory levels", "Inventory"),
    ("view_suppliers", "View Suppliers", "View supplier listings", "Inventory"),
    ("manage_suppliers", "Manage Suppliers", "Create and edit suppliers", "Inventory"),
    # POS & Sales
    ("access_pos", "Access POS", "Access point of sale system", "POS"),
    ("process_sales", "Process Sales", "Process sales transactions", "POS"),
    ("manage_cash_register", "Manage Cash Register", "Manage cash register operations", "POS"),
    # Settings
    ("manage_site_settings", "Manage Site Settings", "Configure site settings", "Settings"),
    # Content
    ("manage_banners", "Manage Banners", "Create and edit banners", "Content"),
    ("manage_home_settings", "Manage Home Settings", "Configure home page settings", "Content"),
    ("view_reviews", "View Reviews", "View product reviews", "Content"),
    ("moderate_reviews", "Moderate Reviews", "Approve or reject reviews", "Content"),
    # System administration
    ("manage_roles", "Manage Roles", "Create and edit roles", "System"),
    ("manage_permissions", "Manage Permissions", "View the permission catalog", "System"),
    ("manage_system_permissions", "Manage System Permissions", "Create, edit, delete and seed permissions", "System"),
    ("manage_system_roles", "Manage System Roles", "Delete and seed roles", "System"),
    ("view_system_logs", "View System Logs", "Access system logs", "System"),
]

# Curated bundles; SUPER_ADMIN and ADMIN are derived from the registry at seed time.
MANAGER_PERMISSIONS = [
    "view_dashboard",
    "view_products",
    "create_products",
    "edit_products",
    "view_orders",
    "edit_orders",
    "process_orders",
    "view_users",
    "view_inventory",
    "manage_inventory",
    "view_suppliers",
    "access_pos",
    "process_sales",
    "manage_cash_register",
    "view_reports",
    "view_analytics",
    "view_reviews",
    "moderate_reviews",
]

EMPLOYEE_PERMISSIONS = [
    "view_dashboard",
    "view_products",
    "view_orders",
    "view_inventory",
    "access_pos",
    "process_sales",
    "view_reviews",
]

CASHIER_PERMISSIONS = ["access_pos", "process_sales", "view_products", "view_inventory"]


def default_roles(active_permission_names: list[str]) -> list[dict]:
    """Build the six system roles against the currently registered names."""
    registered = set(active_permission_names)

    def curated(names: list[str]) -> list[str]:
        return [n for n in names if n in registered]

    return [
        {
            "name": "SUPER_ADMIN",
            "display_name": "Super Admin",
            "description": "Full system access with all permissions",
            "permissions": list(active_permission_names),
            "color": "#9333EA",
            "priority": 100,
        },
        {
            "name": "ADMIN",
            "display_name": "Admin",
            "description": "Administrative access with most permissions",
            "permissions": [n for n in active_permission_names if "system" not in n],
            "color": "#DC2626",
            "priority": 90,
        },
        {
            "name": "MANAGER",
            "display_name": "Manager",
            "description": "Management level access",
            "permissions": curated(MANAGER_PERMISSIONS),
            "color": "#2563EB",
            "priority": 80,
        },
        {
            "name": "EMPLOYEE",
            "display_name": "Employee",
            "description": "Basic employee access",
            "permissions": curated(EMPLOYEE_PERMISSIONS),
            "color": "#16A34A",
            "priority": 70,
        },
        {
            "name": "CASHIER",
            "display_name": "Cashier",
            "description": "POS and sales access",
            "permissions": curated(CASHIER_PERMISSIONS),
            "color": "#CA8A04",
            "priority": 60,
        },
        {
            "name": "CUSTOMER",
            "display_name": "Customer",
            "description": "Customer access",
            "permissions": [],
            "color": "#6B7280",
            "priority": 50,
        },
    ]
