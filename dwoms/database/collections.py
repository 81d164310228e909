# Storage keys
COLLECTIONS = {
    'users': 'dwoms_users',
    'current_user': 'dwoms_current_user',
    'production_entries': 'dwoms_production_entries',
    'tasks': 'dwoms_tasks',
    'inventory': 'dwoms_inventory',
}

# Collection Structure Documentation
COLLECTION_SCHEMAS = {
    'users': {
        'fields': ['id', 'name', 'email', 'role', 'created_by', 'created_at'],
        'required': ['id', 'name', 'email', 'role', 'created_at'],
        'unique': ['email'],
    },
    'current_user': {
        'fields': ['token', 'user', 'created_at'],
        'required': ['token', 'user', 'created_at'],
        'unique': [],
    },
    'production_entries': {
        'fields': ['id', 'worker_id', 'worker_name', 'product_name', 'quantity', 'shift', 'date', 'timestamp'],
        'required': ['id', 'worker_id', 'worker_name', 'product_name', 'quantity', 'shift', 'date', 'timestamp'],
        'unique': ['id'],
    },
    'tasks': {
        'fields': ['id', 'product_type', 'assigned_worker_id', 'assigned_worker_name', 'status', 'estimated_time', 'created_by', 'timestamp', 'completed_at'],
        'required': ['id', 'product_type', 'assigned_worker_id', 'assigned_worker_name', 'status', 'estimated_time', 'created_by', 'timestamp'],
        'unique': ['id'],
    },
    'inventory': {
        'fields': ['id', 'item_name', 'current_stock', 'min_stock_level', 'unit', 'last_updated'],
        'required': ['id', 'item_name', 'current_stock', 'min_stock_level', 'unit', 'last_updated'],
        'unique': ['id'],
    },
}

# Id prefixes per collection
ID_PREFIXES = {
    'users': 'user',
    'production_entries': 'prod',
    'tasks': 'task',
    'inventory': 'inv',
}
