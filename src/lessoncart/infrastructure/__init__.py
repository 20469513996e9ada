# 🏗️ lessoncart/infrastructure/__init__.py
"""
🏗️ Інфраструктура: HTTP-клієнт API, знімок каталогу, координатор замовлень.
"""
