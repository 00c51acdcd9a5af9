# eulerdg

Building blocks for a high-order discontinuous Galerkin / flux reconstruction
solver of the compressible Euler equations in two dimensions. The package holds
the gas-dynamics relations, the physical and numerical fluxes, the boundary
treatments, a modal shock sensor with its filters, the pieces of the
Barth-Jespersen limiter, artificial-viscosity helpers and the helpers that split
element ranges into parallel shards. Array work is done with numpy.

States are the conserved variables `(rho, rho_u, rho_v, energy)`. Functions in
`eulerdg.fluxes` and `eulerdg.riemann` accept arrays whose last axis holds these
four values and work point by point over any leading axes.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `eulerdg.fluids`: `FlowFunction` (an `IntEnum` of derived quantities whose
  `str()` gives a readable label) and the `FreeStream` dataclass, built with
  `new_free_stream(minf, gamma, alpha)` (unit density, angle in degrees) or
  `free_stream_from_state(gamma, qinf)`. `FreeStream.flow_function(...)` and
  `FreeStream.flow_function_state(q, function)` give density, momenta, energy,
  velocities, static and dynamic pressure, pressure coefficient, sound speed,
  Mach number, enthalpy and entropy; `describe()` formats the reference state.
- `eulerdg.partition`: `PartitionMap(parallel_degree, max_index)` splits a range
  into contiguous buckets whose sizes differ by at most one, with methods
  `split`, `bucket`, `bucket_range`, `bucket_dimension`, `local_k` and
  `global_k` (a bucket number of `None` means the whole range). Also
  `parallel_degree_for`, `shard_by_k`, `shard_by_k_transpose` and
  `recombine_shards_k` for splitting and rejoining numpy matrices.
- `eulerdg.initialization`: `InitType`, `parse_init_type(label)` and
  `freestream_solution(free_stream, np_points, kmax)`.
- `eulerdg.fluxes`: `FluxType` and `parse_flux_type(label)` (`average`, `lax`,
  `roe`, `roe-er`), the physical flux `euler_flux`, `transform_flux` onto the
  reference directions, `flux_jacobian`, and the face fluxes `average_flux`,
  `lax_flux` and `lax_flux_interpolated`.
- `eulerdg.riemann`: `roe_flux`, `roe_flux_interpolated` and `roe_er_flux`.
- `eulerdg.boundary`: `riemann_bc` (characteristic far-field state, with a
  supersonic upwind copy), `far_field_bc` over the points of an edge, and
  `wall_flux` for slip walls.
- `eulerdg.locate`: `sample_locations(n_points)` across `[0, 1]` and the
  point-in-triangle search `locate_in_triangles(x, y, vx, vy, etov)`, which
  returns `(element, r, s)`.
- `eulerdg.filters`: `LimiterType` and `parse_limiter_type(label)`,
  `cutoff_filter`, `exponential_filter`, `clipper_matrix`, `element_average`,
  the Barth-Jespersen corner factor `limiter_psi`, and
  `ModeAliasShockFinder(order, v, vinv, mass_matrix, kappa)` with `moment`,
  `shock_indicator` and `has_shock`.
- `eulerdg.dissipation`: `build_vertex_to_element`, `shard_vertex_to_element`,
  `shard_etov`, `propagate_max_to_vertices`, `barycentric_coordinates`,
  `linear_interpolate`, `persson_moment` and `element_viscosity`.

## Example

```python
from eulerdg.fluids import FlowFunction, new_free_stream
from eulerdg.fluxes import euler_flux, lax_flux
from eulerdg.partition import PartitionMap

fs = new_free_stream(2.0, 1.4, 0.0)
print(fs.flow_function_state(fs.qinf, FlowFunction.MACH))             # 2.0
print(fs.flow_function_state(fs.qinf, FlowFunction.STATIC_PRESSURE))  # ~0.714286
fx, fy = euler_flux(fs, fs.qinf)
face_flux = lax_flux(fs, fs.qinf, fs.qinf, (1.0, 0.0))  # equals fx for equal states

pm = PartitionMap(32, 287)
print(pm.bucket_dimension(0), pm.bucket_dimension(31))  # 9 8
print(pm.local_k(10))                                   # (1, 9, 1)
```

## What the package does not do

It provides the pieces a solver is assembled from, not a solver. There is no
mesh reader, no reference element (Vandermonde, mass or divergence matrices must
be supplied by the caller), no edge storage or edge-to-element bookkeeping, no
time integration, no solution driver, no plotting, and no command-line program.