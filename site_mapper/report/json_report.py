# site_mapper/report/json_report.py

"""
Генерация JSON-отчёта для проекта SiteMapper.

Сериализация графа сайта (SiteGraph) в файл: массив страниц в порядке
обнаружения, у каждой — Id, Address, StaticFiles и LinksTo.
"""
import json
from pathlib import Path
from typing import Any, Dict, List

from site_mapper.crawler.graph import SiteGraph


def build_report(graph: SiteGraph) -> List[Dict[str, Any]]:
    """Возвращает экспортное представление графа (список словарей)."""
    return graph.export_view()


def dumps_report(graph: SiteGraph, *, pretty: bool = False) -> str:
    """Сериализует граф в JSON-строку; результат детерминирован для неизменного графа."""
    if pretty:
        return json.dumps(build_report(graph), ensure_ascii=False, indent=2)
    return json.dumps(build_report(graph), ensure_ascii=False, separators=(",", ":"))


def render_json(graph: SiteGraph, output_path: Path | str, *, pretty: bool = False) -> Path:
    """
    Сохраняет граф graph в формате JSON по указанному пути.

    :param graph: объект SiteGraph после завершения обхода
    :param output_path: путь к JSON-файлу
    :param pretty: отступ 2 вместо компактного вывода
    :return: Path сохранённого файла

    Пример:
    ```python
    from site_mapper.report.json_report import render_json
    report_path = render_json(result.graph, 'reports/site.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(dumps_report(graph, pretty=pretty), encoding="utf-8")
    return output


__all__ = ["build_report", "dumps_report", "render_json"]
