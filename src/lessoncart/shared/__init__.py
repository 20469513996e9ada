# 🧰 lessoncart/shared/__init__.py
