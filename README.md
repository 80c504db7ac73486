# lumenkit

Building blocks for a physically based renderer, written in plain Python with
no third-party dependencies.

## What is inside

- `lumenkit.vector`: the immutable `Vec3` type (used for directions, points
  and RGB values), shading-frame trigonometry helpers (`cos_theta`,
  `sin2_phi`, ...), `reflect`, and the warps `square_to_cosine_hemisphere`,
  `square_to_uniform_hemisphere` and `square_to_uniform_sphere` with their
  densities.
- `lumenkit.bxdf`: the `BxDF` base class, the `BxDFType` flags with
  `match_flags`, the `BxDFSampleResult` record and `NullBxDF`.
- `lumenkit.fresnel`: `dielectric_reflectance`,
  `dielectric_reflectance_with_transmission`, `conductor_reflectance` and
  `conductor_reflectance_rgb`.
- `lumenkit.microfacet`: `BeckmannDistribution` and `GGXDistribution`, and
  `load_distribution`, which picks one from a dict's `distribution` key
  (`"beckmann"`, the default, or `"ggx"`; any other name raises `ValueError`).
- Scattering models:
  - `lumenkit.lambertian.LambertianBxDF`
  - `lumenkit.mirror.MirrorBxDF`
  - `lumenkit.conductor.ConductorBxDF` and `RoughConductorBxDF`
  - `lumenkit.dielectric.DielectricBxDF` and `RoughDielectricBxDF`
  - `lumenkit.plastic.PlasticBxDF` and `RoughPlasticBxDF`
  - `lumenkit.disney.DisneyBSDF`, built from the lobes `DisneyDiffuse`,
    `DisneyMetal`, `DisneyClearCoat`, `DisneyGlass` and `DisneySheen`
- `lumenkit.complex_ior`: measured RGB complex indices of refraction
  (`ComplexIor` entries in `COMPLEX_IORS`), found by exact name with `lookup`,
  which returns `None` for an unknown name.
- `lumenkit.texture`: the `Intersection` record, `ConstantTexture`,
  `MixTexture`, `Checkerboard2D` and `Checkerboard3D`, the mappings
  `UVTextureMapping2D` and `NaturalTextureMapping3D`, and `load_texture` /
  `load_texture_field` for building textures from config values.
- `lumenkit.medium`: `Ray`, the `IsotropicPhase` phase function,
  `BeerslawMedium` and `HomogeneousMedium`, and `load_medium` /
  `load_medium_map` for building them from dicts.

## Conventions

Directions are given in the local shading frame, with the surface normal along
+z. `out` points toward the camera and `inc` toward the light.

`BxDF.f(out, inc, adjoint)` and `BxDF.sample(out, sample, adjoint)` scale the
result by the square of `BxDF.eta(out, inc)` when `adjoint` is false;
`adjoint` defaults to false. `sample` takes a pair of numbers in [0, 1).

`RoughDielectricBxDF`, `DisneyGlass` and `DisneyBSDF` draw an extra random
number when sampling (reflect or refract, and which Disney lobe); pass
`rng=random.Random(seed)` to make that repeatable.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
from lumenkit.complex_ior import lookup
from lumenkit.conductor import RoughConductorBxDF
from lumenkit.fresnel import dielectric_reflectance
from lumenkit.medium import Ray, load_medium_map
from lumenkit.microfacet import load_distribution
from lumenkit.texture import Intersection, load_texture_field
from lumenkit.vector import Vec3

# Reflectance of glass at normal incidence.
print(dielectric_reflectance(1 / 1.5, 1.0))

# A rough gold surface with GGX microfacets.
gold = lookup("Au")
roughness = load_texture_field({"roughness": 0.2}, "roughness", 0.0).eval(Intersection())
bxdf = RoughConductorBxDF(
    gold.eta, gold.k, Vec3(1.0), roughness, roughness,
    load_distribution({"distribution": "ggx"}),
)
out = Vec3(0.3, 0.0, 1.0).normalized()
result = bxdf.sample(out, (0.4, 0.7), False)
print(result.direction_in, result.pdf, result.s)

# Free flight through a homogeneous fog up to a surface 5 units away.
mediums = load_medium_map([{"name": "fog", "type": "homogeneous", "sigmaT": [0.2, 0.2, 0.2]}])
ray = Ray(Vec3(0.0), Vec3(0.0, 0.0, 1.0))
hit = Intersection(t=5.0, position=Vec3(0.0, 0.0, 5.0))
record = mediums["fog"].sample_distance(ray, hit, (0.5, 0.3))
print(record.scattered, record.march_length, record.tr)
```

## What it does not do

lumenkit provides the shading pieces only. It has no scene description, no
geometry or ray intersection, no camera, no sample generators and no
integrator, so it does not render images by itself. There is no material layer
that turns a config into a BxDF: BxDFs are constructed directly. Image-file
textures are not supported; `load_texture` raises `ValueError` when given a
file name.