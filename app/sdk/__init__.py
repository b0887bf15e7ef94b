from .api_client import DEFAULT_BASE_URL, ApiClient, ApiError
from .dashboard import DashboardSummary, render_dashboard
from .data_cache import CollectionState, DataCache, LoadState
