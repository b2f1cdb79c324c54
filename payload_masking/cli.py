import argparse
import json
import os
import sys

from payload_masking.config import Config
from payload_masking.config_loader import configure_logging
from payload_masking.core import MaskingEngine, MaskingError
from payload_masking.utils.io import read_text



def main(argv=None):
    parser = argparse.ArgumentParser(description="Payload masking CLI")
    parser.add_argument("--config", default=os.getenv("MASKING_CONFIG_PATH", "masking_config.yaml"))
    parser.add_argument("--log-level", default=os.getenv("MASKING_LOG_LEVEL", "WARNING"))
    sub = parser.add_subparsers(dest="cmd")

    t = sub.add_parser("text", help="Mask a payload given on the command line")
    t.add_argument("payload", help="Raw payload (XML, JSON or fixed length)")

    f = sub.add_parser("file", help="Mask the payload stored in a file")
    f.add_argument("path", help="Path to the payload file")

    args = parser.parse_args(argv)
    if not args.cmd:
        parser.print_help()
        return 2

    configure_logging(args.log_level)
    engine = MaskingEngine(Config.from_yaml(args.config))

    payload = args.payload if args.cmd == "text" else read_text(args.path)
    try:
        res = engine.mask(payload)
    except MaskingError as e:
        print(str(e), file=sys.stderr)
        return 1

    print(
        json.dumps(
            {"masked_payload": res.masked_payload, "payload_type": res.resolved_type_label},
            ensure_ascii=False,
            indent=2,
        )
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
