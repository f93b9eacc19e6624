#!/usr/bin/env python3
"""
EnumPropertyWrangler

Post-processes a generated data-access class model: every option set property of every entity class gets a
strongly typed <Property>Enum twin backed by the option set's enum. Reads the class model and the entity
metadata as JSON and writes the transformed class model as JSON for the code emitter.

Usage:
    python enum_property_wrangler.py --model <model.json> --metadata <metadata.json> --output <out.json> [options]

Arguments:
    --model, -m        : Class model produced by the entity generator
    --metadata, -d     : Entity metadata dump, keyed by entity logical name
    --output, -o       : Where to write the transformed class model
    --settings, -s     : JSON settings file (flat, or with an "appSettings" object)
    --create-base-classes : GetEnum lives on the base entity class; no EntityOptionSetEnum type is emitted
    --base-entity-name : Name of the base entity class (default: EarlyBoundEntity)
    --property-enum-mappings : entity.property,EnumName|...
    --unmapped-properties    : entity:property,property|...
    --option-sets-to-skip    : EnumName|...
    --verbose, -v      : Enable verbose output for debugging

Environment variables EPW_MODEL_FILE, EPW_METADATA_FILE, EPW_OUTPUT_FILE, EPW_SETTINGS_FILE and EPW_VERBOSE
override the matching arguments; the EPW_* setting variables in enum_property_config override settings.

Example:
    python enum_property_wrangler.py -m model.json -d metadata.json -o model.enums.json
    python enum_property_wrangler.py -m model.json -d metadata.json -o out.json --property-enum-mappings "account.statuscode,CustomStatusEnum"
"""

import argparse
import os
import sys
from typing import List, Optional

from class_model import CodeModel
from class_model_debug import debug_print_model
from class_model_json import load_code_model, save_code_model
from enum_property_config import load_settings, EnumPropertySettings
from naming_service import DefaultNamingService
from schema_metadata import load_metadata_store, MetadataStore
from settings_parser import parse_bool
from model_transforms.enum_property_transform import EnumPropertyTransform
from model_transforms.model_transform_pipeline import run_model_transform_pipeline


class EnumPropertyWrangler:
    """
    Loads the inputs, runs the enum property transform and writes the result.
    """

    def __init__(self, model_file: str, metadata_file: str, output_file: str,
                 settings: Optional[EnumPropertySettings] = None, verbose: bool = False):
        self.model_file = model_file
        self.metadata_file = metadata_file
        self.output_file = output_file
        self.settings = settings or EnumPropertySettings()
        self.verbose = verbose
        self.model: Optional[CodeModel] = None
        self.metadata: Optional[MetadataStore] = None

    def debug_print(self, message: str) -> None:
        if self.verbose:
            print(f"[DEBUG] {message}")

    def load_inputs(self) -> None:
        self.model = load_code_model(self.model_file)
        self.metadata = load_metadata_store(self.metadata_file)
        self.debug_print(f"Loaded {len(self.model.types)} types and metadata for {len(self.metadata)} entities")

    def transform(self) -> CodeModel:
        """
        Runs the transform over the loaded model. Raises EnumPropertyError if the model and metadata disagree.
        """
        if self.model is None:
            self.load_inputs()
        transforms = [EnumPropertyTransform(self.metadata, DefaultNamingService(), self.settings, verbose=self.verbose)]
        self.model = run_model_transform_pipeline(self.model, transforms, verbose=self.verbose)
        if self.verbose:
            debug_print_model(self.model)
        return self.model

    def write_output(self) -> None:
        save_code_model(self.model, self.output_file)
        self.debug_print(f"Wrote {self.output_file}")


def parse_arguments(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="Add strongly typed enum properties to a generated entity class model",
        formatter_class=argparse.RawTextHelpFormatter
    )
    parser.add_argument('--model', '-m', help='Class model JSON produced by the entity generator')
    parser.add_argument('--metadata', '-d', help='Entity metadata JSON')
    parser.add_argument('--output', '-o', help='Where to write the transformed class model JSON')
    parser.add_argument('--settings', '-s', help='JSON settings file')
    parser.add_argument('--create-base-classes', action='store_true', default=None,
                        help='GetEnum is provided by the base entity class instead of EntityOptionSetEnum')
    parser.add_argument('--base-entity-name', help='Base entity class name used in base-class mode')
    parser.add_argument('--property-enum-mappings', help='entity.property,EnumName|...')
    parser.add_argument('--unmapped-properties', help='entity:property,property|...')
    parser.add_argument('--option-sets-to-skip', help='EnumName|...')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose output for debugging')
    args = parser.parse_args(argv)

    # Environment variables win over arguments
    args.model = os.environ.get('EPW_MODEL_FILE', args.model)
    args.metadata = os.environ.get('EPW_METADATA_FILE', args.metadata)
    args.output = os.environ.get('EPW_OUTPUT_FILE', args.output)
    args.settings = os.environ.get('EPW_SETTINGS_FILE', args.settings)
    args.verbose = parse_bool(os.environ.get('EPW_VERBOSE'), args.verbose)

    for name in ('model', 'metadata', 'output'):
        if not getattr(args, name):
            parser.error(f"argument --{name} is required")
    return args


def main(argv: Optional[List[str]] = None):
    """
    Main entry point of the script.
    """
    args = parse_arguments(argv)
    overrides = {
        "CreateBaseClasses": args.create_base_classes,
        "BaseEntityName": args.base_entity_name,
        "PropertyEnumMappings": args.property_enum_mappings,
        "UnmappedProperties": args.unmapped_properties,
        "OptionSetsToSkip": args.option_sets_to_skip,
    }
    try:
        settings = load_settings(args.settings, overrides, verbose=args.verbose)
        wrangler = EnumPropertyWrangler(args.model, args.metadata, args.output, settings, args.verbose)
        wrangler.load_inputs()
        wrangler.transform()
        wrangler.write_output()
    except (ValueError, OSError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        print("Enum property generation failed; no output written.")
        sys.exit(1)

    print("Enum property generation completed successfully.")


if __name__ == '__main__':
    main()
