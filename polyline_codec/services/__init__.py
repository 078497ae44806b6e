from polyline_codec.services.polyline import polyline_service, Polyline

__all__ = ["polyline_service", "Polyline"]
