"""ui: віджети PyQt6 для numlab (панель параметрів, таблиця, лог, графік)."""
