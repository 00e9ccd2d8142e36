"""Catalog Sync.

Client-side synchronization engine for a remote product catalog.

This package provides:
- A local, paginated, searchable view of the remote listing
- Debounced query changes with stale-response protection
- Local-first product updates and remote-confirmed deletes
- Local-only favorites and session stores

Operations:
1. set_search_text / set_category - Change the listing query
2. request_next_page - Infinite-scroll pagination
3. create_product / update_product / delete_product - Product mutations
4. reset_catalog - Return the listing to its initial state
"""

__version__ = "1.0.0"
