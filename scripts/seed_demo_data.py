#!/usr/bin/env python
"""空の Chunk Radar データディレクトリにデモ用チャンクとストーリーを投入する。"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--data-dir",
        default=os.environ.get("CHUNK_RADAR_DATA_DIR", ".data"),
        type=Path,
        help="metadata.json とグループファイルを置くディレクトリ（既定: .data）",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="既存データの有無に関わらずデモデータを追加する場合に指定。",
    )
    return parser


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # 設定クラスは import 時点で環境変数を読むため、先に上書きしてから読み込む。
    os.environ["CHUNK_RADAR_DATA_DIR"] = str(args.data_dir)

    repo_root = Path(__file__).resolve().parents[1]
    backend_root = repo_root / "apps" / "backend"
    sys.path.insert(0, str(backend_root))

    from chunkradar.logging import configure_logging
    from chunkradar.seed_demo import seed_demo_data
    from chunkradar.store import create_store

    configure_logging()
    chunks, stories = seed_demo_data(create_store(args.data_dir), force=args.force)
    if chunks == 0 and stories == 0:
        print("Demo data already exists. Skipping seed.")
    print(f"Seeded {chunks} chunks and {stories} stories into {args.data_dir}.")


if __name__ == "__main__":
    main()
