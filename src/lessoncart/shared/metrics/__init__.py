# 📈 lessoncart/shared/metrics/__init__.py
"""
📈 Prometheus-метрики рушія кошика уроків.

🔹 `ORDER_SUBMISSIONS` — спроби оформлення за результатом (committed/partial/failed).
🔹 `INVENTORY_UPDATES` — PUT-запити залишків за результатом.
🔹 `CATALOG_FETCHES` — завантаження каталогу (load/search) за результатом.
🔹 `ORDER_SUBMIT_LATENCY` — гістограма тривалості всього протоколу оформлення.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from prometheus_client import Counter, Histogram                      # 📊 Prometheus-метрики

# ================================
# 🧾 ЗАМОВЛЕННЯ
# ================================
ORDER_SUBMISSIONS = Counter(
    "lessoncart_order_submissions_total",                            # 🏷️ Імʼя метрики
    "Order submission attempts by outcome",                          # 📝 Опис у Prometheus
    ["outcome"],
)

INVENTORY_UPDATES = Counter(
    "lessoncart_inventory_updates_total",
    "Lesson space updates (PUT) by outcome",
    ["outcome"],
)

# ================================
# 📥 КАТАЛОГ
# ================================
CATALOG_FETCHES = Counter(
    "lessoncart_catalog_fetches_total",
    "Catalog fetches by operation and outcome",
    ["operation", "outcome"],
)

# ================================
# ⏱️ ГІСТОГРАМА ЛАТЕНТНОСТІ
# ================================
ORDER_SUBMIT_LATENCY = Histogram(
    "lessoncart_order_submit_seconds",
    "Time to run the order submission protocol",
)


__all__ = [
    "ORDER_SUBMISSIONS",
    "INVENTORY_UPDATES",
    "CATALOG_FETCHES",
    "ORDER_SUBMIT_LATENCY",
]
