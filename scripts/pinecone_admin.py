#!/usr/bin/env python3
"""
Pinecone admin script

Command line front end for index and collection management:

    python scripts/pinecone_admin.py list-indexes
    python scripts/pinecone_admin.py create-index docs --dimension 1536 --metric cosine --serverless aws us-west-2
    python scripts/pinecone_admin.py create-index legacy --pod-type p1.x2 --replicas 2
    python scripts/pinecone_admin.py stats docs

Prints the JSON payload of the response. Exits 0 on success, 1 when the
service rejects the request and 2 on invalid arguments.
"""

import argparse
import asyncio
import json
import os
import sys
from typing import List, Optional

# Add the repository root to path so src is importable
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.pinecone_api import (
    PineconeConfig,
    PineconeError,
    create_collection,
    create_index,
    delete_collection,
    delete_index,
    describe_index,
    describe_index_stats,
    index,
    list_collections,
    list_indices,
    whoami
)
from src.pinecone_api.validation import VALID_METRICS


def _pod_type(value: str):
    if "." not in value:
        raise argparse.ArgumentTypeError(f"pod type must look like p1.x1, got {value!r}")
    return tuple(value.split(".", 1))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage Pinecone indexes and collections")
    parser.add_argument('--api-key', type=str, help='API key, overrides PINECONE_API_KEY')
    parser.add_argument('--environment', type=str, help='Environment, overrides PINECONE_CLOUD_ENVIRONMENT')

    commands = parser.add_subparsers(dest='command', required=True)

    commands.add_parser('whoami', help='Show the project behind the API key')
    commands.add_parser('list-indexes', help='List all indexes')

    describe = commands.add_parser('describe-index', help='Describe an index')
    describe.add_argument('name')

    create = commands.add_parser('create-index', help='Create an index')
    create.add_argument('name')
    create.add_argument('--dimension', type=int, default=384, help='Vector dimensionality')
    create.add_argument('--metric', choices=VALID_METRICS, default='euclidean', help='Distance metric')
    deployment = create.add_mutually_exclusive_group()
    deployment.add_argument('--serverless', nargs=2, metavar=('CLOUD', 'REGION'), help='Serverless deployment')
    deployment.add_argument('--pod-type', type=_pod_type, help='Pod deployment of this pod type, e.g. p1.x1')
    create.add_argument('--pods', type=int, help='Pod count, requires --pod-type (default 1)')
    create.add_argument('--replicas', type=int, help='Replica count, requires --pod-type (default 1)')
    create.add_argument('--shards', type=int, help='Shard count, requires --pod-type (default 1)')

    delete = commands.add_parser('delete-index', help='Delete an index')
    delete.add_argument('name')

    stats = commands.add_parser('stats', help='Describe vector statistics of an index')
    stats.add_argument('name')

    commands.add_parser('list-collections', help='List all collections')

    create_coll = commands.add_parser('create-collection', help='Create a collection from an index')
    create_coll.add_argument('name')
    create_coll.add_argument('source', help='Source index name')

    delete_coll = commands.add_parser('delete-collection', help='Delete a collection')
    delete_coll.add_argument('name')

    return parser


POD_COUNT_FLAGS = ("pods", "replicas", "shards")


def _count(value: Optional[int]) -> int:
    return 1 if value is None else value


def _index_spec(args: argparse.Namespace) -> Optional[dict]:
    if args.serverless:
        cloud, region = args.serverless
        return {"serverless": {"cloud": cloud, "region": region}}
    if args.pod_type:
        return {"pod": {
            "pods": _count(args.pods),
            "replicas": _count(args.replicas),
            "shards": _count(args.shards),
            "pod_type": args.pod_type
        }}
    return None


async def run_command(args: argparse.Namespace):
    config = PineconeConfig(api_key=args.api_key, environment=args.environment)

    if args.command == 'whoami':
        return await whoami(config=config)
    if args.command == 'list-indexes':
        return await list_indices(config=config)
    if args.command == 'describe-index':
        return await describe_index(args.name, config=config)
    if args.command == 'create-index':
        return await create_index(
            args.name,
            dimension=args.dimension,
            metric=args.metric,
            spec=_index_spec(args),
            config=config
        )
    if args.command == 'delete-index':
        return await delete_index(args.name, config=config)
    if args.command == 'stats':
        return await describe_index_stats(index(args.name), config=config)
    if args.command == 'list-collections':
        return await list_collections(config=config)
    if args.command == 'create-collection':
        return await create_collection(args.name, args.source, config=config)
    if args.command == 'delete-collection':
        return await delete_collection(args.name, config=config)
    raise ValueError(f"unknown command {args.command}")


async def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == 'create-index' and not args.pod_type:
        given = [f"--{flag}" for flag in POD_COUNT_FLAGS if getattr(args, flag) is not None]
        if given:
            parser.error(f"{', '.join(given)} only apply to pod deployments, add --pod-type")

    try:
        result = await run_command(args)
    except PineconeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print(json.dumps(result.payload, indent=2))
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
