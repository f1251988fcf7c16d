import argparse
import logging
import sys
import time

from .config import PricerConfig, load_config
from .core import CALL, PUT, PricingRequest, SimulationParameters, InvalidParameter
from .black_scholes import closed_form_price
from .monte_carlo import price_option
from .sampling import NormalSampler
from .validation import relative_error, convergence_study, variance_is_stable

logger = logging.getLogger(__name__)


def _kind(s: str):
    s = s.lower()
    if s in {"call", "c"}:
        return (CALL,)
    if s in {"put", "p"}:
        return (PUT,)
    if s in {"both", "b"}:
        return (CALL, PUT)
    raise argparse.ArgumentTypeError("kind must be 'call', 'put' or 'both'")


def _positive_int(s: str) -> int:
    try:
        v = int(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {s!r}") from None
    if v <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {v}")
    return v


def add_common(parser: argparse.ArgumentParser):
    parser.add_argument("--S0", type=float, default=None, help="initial price")
    parser.add_argument("--K", type=float, default=None, help="strike")
    parser.add_argument("--r", type=float, default=None, help="cont. risk-free rate")
    parser.add_argument("--mu", type=float, default=None,
                        help="real-world drift (displayed only, not simulated)")
    parser.add_argument("--sigma", type=float, default=None)
    parser.add_argument("--T", type=float, default=None, help="years")
    parser.add_argument("--steps", type=_positive_int, default=None)
    parser.add_argument("--workers", type=_positive_int, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--kind", type=_kind, default=(CALL, PUT), help="call|put|both")


def _config(args) -> PricerConfig:
    overrides = {
        name: getattr(args, attr)
        for name, attr in (
            ("S0", "S0"), ("K", "K"), ("r", "r"), ("mu", "mu"), ("sigma", "sigma"),
            ("T", "T"), ("steps", "steps"), ("paths", "paths"), ("n_workers", "workers"),
        )
        if getattr(args, attr, None) is not None
    }
    return load_config(**overrides)


def _request(cfg: PricerConfig, kind: str, n_trials: int) -> PricingRequest:
    params = SimulationParameters(S0=cfg.S0, sigma=cfg.sigma, T=cfg.T, n_steps=cfg.steps)
    return PricingRequest(params=params, K=cfg.K, kind=kind, n_trials=n_trials, r=cfg.r)


def _print_parameters(cfg: PricerConfig):
    print("Parameters:")
    print(f"  Initial Stock Price (S0): {cfg.S0}")
    print(f"  Strike Price (K):         {cfg.K}")
    print(f"  Risk-free Rate (r):       {cfg.r}")
    print(f"  Drift Rate (mu):          {cfg.mu}")
    print(f"  Volatility (sigma):       {cfg.sigma}")
    print(f"  Time to Maturity (T):     {cfg.T}")
    print(f"  Time Steps:               {cfg.steps}")
    print(f"  Monte Carlo Paths:        {cfg.paths}")
    print()


def _run_timed(cfg: PricerConfig, kinds, n_workers: int, seed):
    start = time.perf_counter()
    results = {
        kind: price_option(_request(cfg, kind, cfg.paths), n_workers=n_workers,
                           seed=seed, batch_size=cfg.batch_size)
        for kind in kinds
    }
    return results, time.perf_counter() - start


def cmd_price(args):
    cfg = _config(args)
    _print_parameters(cfg)

    logger.info("Running Monte Carlo simulation with %d worker(s)", cfg.n_workers)
    results, elapsed = _run_timed(cfg, args.kind, cfg.n_workers, args.seed)
    print(f"Runtime ({cfg.n_workers} workers): {elapsed * 1e3:.0f} ms")

    if args.compare_serial and cfg.n_workers > 1:
        logger.info("Running single-worker version for comparison")
        _, serial = _run_timed(cfg, args.kind, 1, args.seed)
        print(f"Runtime (1 worker):  {serial * 1e3:.0f} ms")
        print(f"Speedup: {serial / elapsed:.2f}x")
    print()

    for kind in args.kind:
        res = results[kind]
        bs = closed_form_price(cfg.S0, cfg.K, cfg.r, cfg.sigma, cfg.T, kind)
        print(f"{kind.capitalize()} Option:")
        print(f"  Monte Carlo:    {res.price:.6f} ± {res.stderr:.6f}")
        print(f"  Black-Scholes:  {bs:.6f}")
        if bs > 0:
            print(f"  Relative Error: {relative_error(res.price, bs) * 100:.4f}%")
        print()

    total_paths = cfg.paths * len(args.kind)
    print("Performance:")
    print(f"  Runtime: {elapsed * 1e3:.0f} ms")
    print(f"  Paths per second: {total_paths / elapsed:.0f}")


def cmd_samples(args):
    sampler = NormalSampler(args.seed)
    print("Random Normal Samples:")
    for i in range(1, args.count + 1):
        print(f"  Sample {i}: {sampler.sample():.6f}")


def cmd_convergence(args):
    cfg = _config(args)
    for kind in args.kind:
        out = convergence_study(
            _request(cfg, kind, args.paths_list[0]), args.paths_list,
            seed=args.seed, n_workers=cfg.n_workers,
        )
        print(f"{kind.capitalize()} option (Black-Scholes {out['reference']:.6f}):")
        print(f"  {'paths':>12}  {'price':>12}  {'stderr':>10}  {'variance':>12}  {'abs err':>10}")
        for n, p, se, v, e in zip(out["n_trials"], out["prices"], out["stderrs"],
                                  out["variances"], out["errors"]):
            print(f"  {n:>12d}  {p:>12.6f}  {se:>10.6f}  {v:>12.4e}  {e:>10.6f}")
        stable = "yes" if variance_is_stable(out["variances"]) else "no"
        print(f"  stderr decay order: {out['order']:.3f}   variance stable: {stable}")
        print()


def main(argv=None):
    p = argparse.ArgumentParser(prog="mcpricer",
                                description="Monte Carlo vs Black-Scholes option pricer")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Monte Carlo price vs closed form
    p_price = sub.add_parser("price", help="Monte Carlo price with Black-Scholes comparison")
    add_common(p_price)
    p_price.add_argument("--paths", type=_positive_int, default=None)
    p_price.add_argument("--compare-serial", action="store_true",
                         help="rerun with one worker and report the speedup")
    p_price.set_defaults(func=cmd_price)

    # Sampler smoke check
    p_smp = sub.add_parser("samples", help="print draws from the normal sampler")
    p_smp.add_argument("--count", type=_positive_int, default=5)
    p_smp.add_argument("--seed", type=int, default=None)
    p_smp.set_defaults(func=cmd_samples)

    # Convergence study
    p_conv = sub.add_parser("convergence", help="stderr and variance across trial counts")
    add_common(p_conv)
    p_conv.add_argument("--paths-list", dest="paths_list", type=_positive_int, nargs="+",
                        default=[10_000, 100_000, 1_000_000])
    p_conv.set_defaults(func=cmd_convergence)

    args = p.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        args.func(args)
    except InvalidParameter as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
