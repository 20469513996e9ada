# 🏛️ lessoncart/domain/__init__.py
"""
🏛️ Доменний шар: сутності, сортування, валідація, кошик і стани оформлення.
Без мережі та I/O.
"""
