# sqlbrowser/services/config_svc.py
from ..db import read_config_yaml, get_db_path, get_log_db_path
from .utils import to_int_safe

DEFAULTS = {
    "page_size": 200,      # 表格视图单页最多加载的行数
    "search_limit": 200,
}


def get_config() -> dict:
    cfg = read_config_yaml()
    page_size = to_int_safe(cfg.get("page_size"), DEFAULTS["page_size"])
    search_limit = to_int_safe(cfg.get("search_limit"), DEFAULTS["search_limit"])
    return {
        "page_size": page_size if page_size > 0 else DEFAULTS["page_size"],
        "search_limit": search_limit if search_limit > 0 else DEFAULTS["search_limit"],
        "db_path": get_db_path(),
        "log_db_path": get_log_db_path(),
    }

