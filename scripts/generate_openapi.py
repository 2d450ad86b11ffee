import json
from pathlib import Path

from bookstore_api.main import app


def main(docs_dir: Path = Path("docs")) -> Path:
    schema = app.openapi()
    docs_dir.mkdir(exist_ok=True)

    output_path = docs_dir / "openapi.json"
    with output_path.open("w", encoding="utf-8") as f:
        json.dump(schema, f, indent=2)

    print(f"OpenAPI spec successfully written to {output_path}")
    return output_path


if __name__ == "__main__":
    main()
