from relayops.core.config import RouterConfig, settings


def router_config() -> RouterConfig:
    """FastAPI dependency: 요청마다 넘겨줄 불변 설정 값"""
    return settings.router_config()
