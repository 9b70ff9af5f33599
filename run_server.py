import argparse

from chord_server import start_server
from config import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_RING_BITS, LOG_LEVEL
from logger import Logger

def main():
    parser = argparse.ArgumentParser(description="Chord ring simulation service")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--bits", type=int, default=DEFAULT_RING_BITS,
                        help="ring parameter M; identifier space is 2**M")
    parser.add_argument("--nodes", type=int, default=0,
                        help="number of random nodes to start with")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed for random node ids (optional)")
    parser.add_argument("--log-level", default=LOG_LEVEL)
    args = parser.parse_args()
    Logger.set_level(args.log_level)
    start_server(args.host, args.port, args.bits, args.seed, args.nodes)

if __name__ == "__main__":
    main()
