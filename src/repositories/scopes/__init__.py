from .pagination import Pagination, paginate, offset_cal

__all__ = ["Pagination", "paginate", "offset_cal"]
