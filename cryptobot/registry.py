from typing import Dict, Iterator, List, Optional

from .models import AlertKey, AlertRecord, normalize_coin


class AlertRegistry:
    """In-memory price alerts, at most one per (user, coin).

    Process-lifetime state only; nothing is written to disk.
    """

    def __init__(self):
        self._alerts: Dict[AlertKey, AlertRecord] = {}

    def set_alert(self, user_id: int, coin: str, target_price: float) -> AlertRecord:
        rec = AlertRecord(user_id=user_id, coin=normalize_coin(coin), target_price=float(target_price))
        # re-setting an existing key keeps its original position
        self._alerts[rec.key] = rec
        return rec

    def list_alerts(self, user_id: int) -> Iterator[AlertRecord]:
        return (r for r in self._alerts.values() if r.user_id == user_id)

    def remove_alert(self, key: AlertKey) -> bool:
        return self._alerts.pop(key, None) is not None

    def get(self, key: AlertKey) -> Optional[AlertRecord]:
        return self._alerts.get(key)

    def keys(self) -> List[AlertKey]:
        return list(self._alerts)

    def __len__(self) -> int:
        return len(self._alerts)

    def __contains__(self, key) -> bool:
        return key in self._alerts
