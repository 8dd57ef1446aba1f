#slot_manager\api\container.py
from functools import lru_cache

from slot_manager.container import Container, create_container


@lru_cache(maxsize=1)
def get_container() -> Container:
    return create_container()
