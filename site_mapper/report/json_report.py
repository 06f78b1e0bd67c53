# site_mapper/report/json_report.py

"""
JSON-отчёт о запуске SiteMapper: время, число страниц и их список.
"""
import json
from pathlib import Path

from site_mapper.crawler.models import RunResult


def render_json(result: RunResult, output_path: Path | str) -> Path:
    """
    Сохраняет отчёт о запуске в формате JSON по указанному пути.

    :param result: успешный RunResult
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "timestamp": result.timestamp.isoformat(timespec="seconds") if result.timestamp else None,
        "count": result.count,
        "urls": result.urls,
    }

    with output.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return output
