from .resolver import AddressesT


def same_length(a: AddressesT, b: AddressesT) -> bool:
    return len(a) == len(b)


def same_contents(a: AddressesT, b: AddressesT) -> bool:
    return sorted(a) == sorted(b)


def equivalent(a: AddressesT, b: AddressesT) -> bool:
    """
    two address sets are equivalent when they hold the same addresses,
    regardless of the order the resolver returned them in
    """
    return same_length(a, b) and same_contents(a, b)
