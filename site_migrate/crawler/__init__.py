"""Сетевой слой: загрузка страниц, кодировки, поиск ссылок и обход досок."""
