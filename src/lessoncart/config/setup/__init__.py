# 🧰 lessoncart/config/setup/__init__.py
"""
🧰 Збирання рушія: налаштування та контейнер залежностей.
"""
