# news_scout/report/json_report.py

"""
Генерация JSON-отчёта для проекта NewsScout.

Сериализация объекта BatchReport в файл.
"""
from pathlib import Path

from news_scout.aggregator import BatchReport


def render_json(report: BatchReport, output_path: Path | str) -> Path:
    """
    Сохраняет отчёт report в формате JSON по указанному пути.

    :param report: объект BatchReport с результатами проверки
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла

    Пример:
    ```python
    from news_scout.report.json_report import render_json
    report_path = render_json(report, 'reports/results.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    # Список DomainResult с журналом попыток (searchResults)
    output.write_text(report.json(pretty=True), encoding='utf-8')

    return output
