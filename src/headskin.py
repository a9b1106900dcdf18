import argparse
import sys
import uuid
from typing import Optional

import requests

import skull_texture
from player_directory import MojangPlayerDirectory, OfflinePlayerDirectory, PlayerLookupError
from skull_meta import ItemStack, PLAYER_HEAD, SkullMeta
from skull_utils import SkullUtils


def describe_head(utils: SkullUtils, meta: SkullMeta, decode: bool = False) -> None:
    if meta.owning_player is not None:
        print(f"Owner: {meta.owning_player.name} ({meta.owning_player.unique_id})")
    elif meta.owner is not None:
        print(f"Owner: {meta.owner}")

    texture = utils.get_skin_value(meta)
    if texture is None:
        if not meta.has_owner():
            print("No skin applied.")
        return

    print(f"Profile: {texture.profile_id}")
    print(f"Value: {texture.value}")
    if decode:
        url = skull_texture.decode_profile_value(texture.value)
        print(f"Skin URL: {url if url else '(not a texture descriptor)'}")


def apply_identifier(utils: SkullUtils, identifier: str, decode: bool = False) -> Optional[SkullMeta]:
    """Builds a head with the given skin and prints what ended up on it."""
    kind = skull_texture.classify(identifier)
    print(f"Identifier kind: {kind.value}")

    head = ItemStack(PLAYER_HEAD)
    meta = head.get_item_meta()
    try:
        utils.apply_skin(meta, identifier)
    except (requests.RequestException, PlayerLookupError) as e:
        print(f"Error resolving player '{identifier}': {e}")
        return None
    head.set_item_meta(meta)

    describe_head(utils, head.get_item_meta(), decode)
    return meta


def interactive_mode(utils: SkullUtils):
    print("\n=== Head Skin Wizard ===")
    print("Enter a player name, texture url, texture hash or Base64 value.")

    identifier = input("Skin: ").strip()
    if not identifier:
        print("Nothing entered.")
        return

    decode = input("Decode the texture value? (y/N): ").strip().lower() == "y"
    apply_identifier(utils, identifier, decode)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Apply Minecraft skins to player heads.")
    parser.add_argument("-i", "--identifier", help="Player name, texture url, texture hash or Base64 value")
    parser.add_argument("-u", "--uuid", help="Create a head owned by this player UUID")
    parser.add_argument("--server-version", default=SkullUtils.DEFAULT_SERVER_VERSION,
                        help="Server version, decides how owners are set")
    parser.add_argument("--online", action="store_true", help="Look up player names on the Mojang API")
    parser.add_argument("--classify", action="store_true", help="Only print the identifier kind")
    parser.add_argument("--decode", action="store_true", help="Print the skin url of the applied texture")

    if argv is None:
        argv = sys.argv[1:]

    args = parser.parse_args(argv)

    try:
        directory = MojangPlayerDirectory() if args.online else OfflinePlayerDirectory()
        utils = SkullUtils.create(directory, args.server_version)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    if not argv:
        interactive_mode(utils)
        return 0

    if args.uuid:
        try:
            player_id = uuid.UUID(args.uuid)
        except ValueError:
            print(f"Error: Invalid UUID: {args.uuid}")
            return 1
        head = utils.get_skull(player_id)
        describe_head(utils, head.get_item_meta(), args.decode)
        return 0

    if args.identifier is None:
        print("Error: Identifier required (use -i, -u or interactive mode).")
        return 1

    if args.classify:
        print(skull_texture.classify(args.identifier).value)
        return 0

    meta = apply_identifier(utils, args.identifier, args.decode)
    return 0 if meta is not None else 1


if __name__ == "__main__":
    sys.exit(main())
