import argparse
import logging

from .core import CALL, PUT, DomainError
from .cev import cev_price, cev_mass_zero

def _kind(s: str):
    s = s.lower()
    if s in {"call", "c"}:
        return CALL
    if s in {"put", "p"}:
        return PUT
    raise argparse.ArgumentTypeError("kind must be 'call' or 'put'")

def add_common(parser: argparse.ArgumentParser):
    parser.add_argument("--spot", type=float, default=None)
    parser.add_argument("--texp", type=float, default=1.0, help="years")
    parser.add_argument("--sigma", type=float, required=True)
    parser.add_argument("--beta", type=float, default=0.5, help="elasticity (< 1)")
    parser.add_argument("--intr", type=float, default=0.0, help="cont. interest rate")
    parser.add_argument("--divr", type=float, default=0.0, help="cont. dividend yield")
    parser.add_argument("--forward", type=float, default=None, help="overrides spot")
    parser.add_argument("--df", type=float, default=None, help="overrides intr")
    parser.add_argument("-v", "--verbose", action="store_true")

def cmd_price(args):
    strikes = args.strike if args.strike else [None]
    for K in strikes:
        px = cev_price(K, args.spot, args.texp, args.sigma, args.beta,
                       args.intr, args.divr, args.kind,
                       forward=args.forward, df=args.df)
        print(f"{px:.10f}")

def cmd_mass(args):
    mass = cev_mass_zero(args.spot, args.texp, args.sigma, args.beta,
                         args.intr, args.divr, forward=args.forward, df=args.df)
    print(f"{mass:.10f}")

def main(argv=None):
    p = argparse.ArgumentParser(prog="cevpricer", description="CEV option pricing CLI")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Price
    p_px = sub.add_parser("price", help="CEV European option price")
    add_common(p_px)
    p_px.add_argument("--strike", type=float, nargs="+", default=None,
                      help="one or more strikes (default: forward)")
    p_px.add_argument("--kind", type=_kind, default=CALL, help="call|put")
    p_px.set_defaults(func=cmd_price)

    # Mass at zero
    p_mass = sub.add_parser("mass", help="CEV probability mass at zero")
    add_common(p_mass)
    p_mass.set_defaults(func=cmd_mass)

    args = p.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        args.func(args)
    except DomainError as e:
        p.error(str(e))

if __name__ == "__main__":
    main()
