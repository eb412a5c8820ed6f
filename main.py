import sys
import tomllib
from pathlib import Path

from geotech import calculator
from geotech.config import configure_logging, load_settings
from geotech.storage import build_store
from plot import ChartPlotter


def load_request(path: str) -> tuple[str, dict]:
    """Загрузить запрос из TOML: ключ kind и тело запроса."""
    with open(path, "rb") as f:
        data = tomllib.load(f)

    kind = data.pop("kind", None)
    if kind not in calculator.KINDS:
        raise SystemExit(f"Неизвестный вид расчёта: {kind!r} (допустимо: {', '.join(calculator.KINDS)})")
    return kind, data


def main(input_file: str = "request.toml", theme: str = "light"):
    """Загрузка → расчёт → вывод → графики."""
    settings = load_settings()
    configure_logging(settings)

    kind, body = load_request(input_file)
    status, response = calculator.run(calculator.KINDS[kind], body, build_store(settings))

    if status != 200:
        print(f"Ошибка ({status}): {response['message']}")
        return status, response

    print(f"Расчёт: {kind}")
    print(f"Норматив: {response['standard']}")
    print(f"Заключение: {response['interpretation']}")
    if response["classifications"]:
        print(f"Классификация: {', '.join(response['classifications'])}")
    for warning in response["warnings"]:
        print(f"  ! {warning}")

    plotter = ChartPlotter(response["chart_data"], title=f"{kind}: {body.get('test_id') or body.get('project_id') or ''}", theme=theme)
    fig = plotter.plot().get_figure()
    output_name = str(Path(input_file).with_suffix(".html"))
    fig.write_html(output_name)
    print(f"График: {output_name}")

    return status, response


if __name__ == "__main__":
    input_file = sys.argv[1] if len(sys.argv) > 1 else "request.toml"
    main(input_file)
