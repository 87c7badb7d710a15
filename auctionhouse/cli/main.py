"""
Auction House CLI

Main entry point for all CLI commands.
"""

import json

import click

from auctionhouse.utils.logger import AuctionLogger, setup_logging


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--env-file", default=None, type=click.Path(dir_okay=False), help="Read AUCTIONHOUSE_* settings from this .env file")
@click.option("--log-file", is_flag=True, help="Also write logs to <log_dir>/auctionhouse.log")
@click.version_option(version="0.1.0")
@click.pass_context
def cli(ctx, debug, env_file, log_file):
    """Auction House - escrowed auctions for unique assets"""
    import logging
    from auctionhouse.core.config import load_config

    config = load_config(env_file)

    level = logging.DEBUG if debug else logging.WARNING
    setup_logging(level=level, log_dir=config.log_dir, log_to_file=log_file)
    if log_file:
        ctx.call_on_close(AuctionLogger.close_file_log)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config


@cli.command("config")
@click.pass_context
def show_config(ctx):
    """Print the effective configuration"""
    data = ctx.obj["config"].as_dict()
    data["log_dir"] = str(data["log_dir"])
    click.echo(json.dumps(data, indent=2))


# =============================================================================
# Demo Command
# =============================================================================


@cli.command("demo")
@click.option("--reserve", default=1_000_000, show_default=True, help="Reserve price")
@click.option("--royalty-bps", default=500, show_default=True, help="Royalty in basis points")
@click.option("--duration", default=150, show_default=True, help="Auction duration in blocks")
@click.option("--events", "show_events", is_flag=True, help="Print the event log as JSON")
@click.pass_context
def demo(ctx, reserve, royalty_bps, duration, show_events):
    """Run a full auction lifecycle in memory"""
    from auctionhouse.core import AuctionHouse

    house = AuctionHouse(config=ctx.obj["config"])
    seller, alice, bob, artist = "seller", "alice", "bob", "artist"

    click.echo("=" * 60)
    click.echo("  AUCTION HOUSE - DEMO")
    click.echo("=" * 60)
    click.echo()

    for account in (alice, bob):
        house.payments.credit(account, 100 * reserve)
    asset = house.assets.mint(seller)
    click.echo(f"Minted {asset} to {seller}")

    auction_id, err = house.create_auction(seller, asset, duration, reserve, royalty_bps, artist)
    if err is not None:
        raise click.ClickException(f"create_auction failed: {err.name}")
    auction = house.get_auction(auction_id)
    click.echo(f"Auction {auction_id} listed, reserve {reserve}, ends at block {auction.end_time}")

    bids = [(alice, reserve)]
    next_bid = house.queries.get_min_bid(auction_id)
    bids.append((bob, max(next_bid, reserve + reserve // 10)))

    for bidder, amount in bids:
        ok, err = house.bid(auction_id, amount, bidder)
        if not ok:
            raise click.ClickException(f"bid by {bidder} failed: {err.name}")
        click.echo(f"  {bidder} bids {amount} (next minimum {house.get_min_bid(auction_id)})")

    click.echo(f"  {alice} escrow after being outbid: {house.get_escrow(auction_id, alice)}")

    remaining = house.get_status(auction_id).blocks_remaining
    house.clock.advance(remaining)
    click.echo(f"Mined {remaining} blocks, now at block {house.clock.now()}")

    receipt, err = house.end_auction(auction_id, asset, alice)
    if err is not None:
        raise click.ClickException(f"end_auction failed: {err.name}")

    click.echo()
    click.echo(f"Asset {asset} now owned by {house.assets.owner_of(asset)}")
    click.echo(f"Royalty to {artist}: {receipt.royalty_amount}")
    click.echo(f"Seller received: {receipt.seller_amount}")
    click.echo(f"Event log: {len(house.events)} records, chain valid: {house.events.verify()}")

    if show_events:
        for event in house.events.records:
            click.echo(event.model_dump_json())


if __name__ == "__main__":
    cli()
