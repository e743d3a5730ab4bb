"""Course-data provider: Canvas client, offline sample data and sync."""
from .client import CanvasClient, get_canvas_client, infer_weight
from .sync import SyncResult, sync_course_data

__all__ = ["CanvasClient", "SyncResult", "get_canvas_client", "infer_weight", "sync_course_data"]
