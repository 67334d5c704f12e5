import argparse
import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
BACKEND = ROOT / "backend"
if str(BACKEND) not in sys.path:
    sys.path.insert(0, str(BACKEND))

from kardex.config import KardexConfig  # noqa: E402
from kardex.database import build_engine, build_session_factory, init_db  # noqa: E402
from kardex.ingest import ingest_kardex, preview_kardex  # noqa: E402
from kardex.logging_config import configure_logging  # noqa: E402


def parse_args():
    p = argparse.ArgumentParser(description="Preview or ingest one kardex JSON payload.")
    p.add_argument("--file", required=True, help="Path to the kardex JSON payload")
    p.add_argument("--database-url", help="Overrides KARDEX_DATABASE_URL")
    p.add_argument("--apply", action="store_true", help="Actually write to DB (default is a decode-only preview)")
    return p.parse_args()


def load_payload(path: Path) -> dict:
    if not path.exists():
        raise SystemExit(f"File not found: {path}")
    raw = json.loads(path.read_text(encoding="utf-8-sig"))
    if not isinstance(raw, dict):
        raise SystemExit(f"Expected a JSON object in {path}")
    raw.setdefault("source_file", path.name)
    return raw


def main() -> None:
    args = parse_args()
    config = KardexConfig.from_env()
    configure_logging(config.log_level)
    payload = load_payload(Path(args.file).resolve())

    if not args.apply:
        print(json.dumps(preview_kardex(payload), ensure_ascii=False, indent=2))
        return

    engine = build_engine(args.database_url or config.database_url)
    init_db(engine)
    session_factory = build_session_factory(engine)
    with session_factory() as db:
        result = ingest_kardex(db, payload, email_domain=config.email_domain)
    print(result.model_dump(by_alias=True))


if __name__ == "__main__":
    main()
