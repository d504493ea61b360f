import argparse
import logging
import sys
from typing import Dict, Optional

from config import Config, ConfigManager, ROLE_ORDER
from restyle_core.core.config import (load_style_document, save_style_document,
                                      validate_style_document)
from restyle_core.core.llm import MissingCredentialError, StyleGenerationError, StyleGenerator
from restyle_core.core.session import StyleSession
from restyle_core.core.surface import StyleDocumentMap
from restyle_core.core.util import is_hex_color, log_progress

DEFAULT_OUTPUT = 'maplibre-style.json'


def load_document(source: str) -> Optional[Dict]:
    """Load and validate a style document, reporting problems as progress lines."""
    document = load_style_document(source, timeout=Config.STYLE_FETCH_TIMEOUT)
    if document is None:
        log_progress(f"Error: {source} not found or invalid.")
        return None
    err = validate_style_document(document)
    if err:
        log_progress(f"Schema validation warning: {err}")
    log_progress(f"Loaded style from: {source}")
    return document


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Restyle a MapLibre style document by role colors or prompt.')
    parser.add_argument('--style', type=str, default=Config.STYLE_URL,
                        help='Path or URL of the style document to restyle.')
    parser.add_argument('--output', type=str, default=DEFAULT_OUTPUT, help='Where to write the restyled document.')
    parser.add_argument('--prompt', type=str, help='Describe the style in words; requires OPENAI_API_KEY.')
    parser.add_argument('--roles-dir', type=str, default=Config.ROLE_CONFIG_DIR,
                        help='Directory holding a roles.json keyword table.')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging.')
    for role in ROLE_ORDER:
        parser.add_argument(f'--{role.value}', type=str, metavar='#RRGGBB',
                            help=f'Color for {role.value}; pinned when used with --prompt.')
    return parser


def main(argv=None) -> int:
    """Restyle a style document and write it to disk."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(levelname)s %(name)s: %(message)s')

    document = load_document(args.style)
    if document is None:
        return 1

    generator = None
    if args.prompt:
        try:
            generator = StyleGenerator(
                api_key=Config.OPENAI_API_KEY,
                model=Config.OPENAI_MODEL,
                temperature=Config.OPENAI_TEMPERATURE,
                max_tokens=Config.OPENAI_MAX_TOKENS,
            )
        except MissingCredentialError as e:
            log_progress(f"Error: {e}")
            return 1

    keywords = ConfigManager(args.roles_dir).get_role_keywords()
    session = StyleSession(StyleDocumentMap(document), generator=generator, keywords=keywords)

    for role in ROLE_ORDER:
        color = getattr(args, role.value)
        if color is None:
            continue
        if not is_hex_color(color):
            log_progress(f"Error: --{role.value} must be a hex color like #RRGGBB, got {color!r}")
            return 1
        session.set_picker(role.value, color)

    try:
        if args.prompt:
            report = session.apply_prompt(args.prompt)
        else:
            report = session.apply_manual()
    except StyleGenerationError as e:
        log_progress(f"Error: AI request failed: {e}")
        return 1

    if report.unmatched:
        log_progress(f"Roles with no matching layers: {', '.join(report.unmatched)}")
    path = save_style_document(session.export_document(), args.output)
    log_progress(f"Saved restyled document to {path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
