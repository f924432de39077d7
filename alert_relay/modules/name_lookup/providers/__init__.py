from alert_relay.modules.name_lookup.providers.sina_provider import SinaNameProvider
from alert_relay.modules.name_lookup.providers.tencent_provider import TencentNameProvider

__all__ = ["SinaNameProvider", "TencentNameProvider"]
