"""
functions to access the configuration dictionary in a clearer way
"""
import toolz as tz

LOOKUPS = {
    "log_dir": {"keys": ["log_dir"], "default": "log"},
    "panels_depth": {"keys": ["algorithm", "panels_depth"], "default": 30,
                     "checker": lambda x: int(x) >= 0},
    "genotyping_qual": {"keys": ["algorithm", "genotyping_qual"], "default": 30,
                        "checker": lambda x: float(x) >= 0},
    "genotyping_depth": {"keys": ["algorithm", "genotyping_depth"], "default": 1000,
                         "checker": lambda x: int(x) >= 0},
    "interpretations": {"keys": ["resources", "interpretations"]},
}

def get_keys(lookup):
    """
    return the keys used to look up a function in the datadict
    """
    return tz.get_in((lookup, "keys"), LOOKUPS, None)

def getter(keys, global_default=None, checker=None):
    def lookup(config, default=None):
        default = global_default if default is None else default
        val = tz.get_in(keys, config, default)
        if checker and val is not None and not checker(val):
            raise ValueError("Invalid configuration value for %s: %s" % (":".join(keys), val))
        return val
    return lookup

def setter(keys):
    def update(config, value):
        return tz.update_in(config, keys, lambda x: value, default=value)
    return update

"""
generate the getter and setter functions but don't override any explicitly
defined
"""
_g = globals()
for k, v in LOOKUPS.items():
    keys = v['keys']
    getter_fn = 'get_' + k
    if getter_fn not in _g:
        _g[getter_fn] = getter(keys, v.get('default', None), v.get('checker', None))
    setter_fn = 'set_' + k
    if setter_fn not in _g:
        _g[setter_fn] = setter(keys)

def get_thresholds(config):
    """Retrieve the numeric thresholds used for QC and coverage decisions.
    """
    return {"panels_depth": int(get_panels_depth(config)),
            "genotyping_qual": float(get_genotyping_qual(config)),
            "genotyping_depth": int(get_genotyping_depth(config))}
