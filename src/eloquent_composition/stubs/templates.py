r"""Built-in PHP stubs.

Placeholders: ``{{ namespace }}``, ``{{ rootNamespace }}`` and
``{{ class }}``. A project overrides any of them with a file of the same
name under its stubs directory (``stubs/collection.stub``, ...).

Composition stubs are method bodies appended inside an existing model
class; once rendered they must not contain the word ``class`` in lowercase,
since the annotation editor anchors on it.
"""

from __future__ import annotations

# ── Class stubs ───────────────────────────────────────────────────

MODEL = r"""<?php

namespace {{ namespace }};

use Illuminate\Database\Eloquent\Factories\HasFactory;
use Illuminate\Database\Eloquent\Model;

class {{ class }} extends Model
{
    use HasFactory;
}
"""

COLLECTION = r"""<?php

namespace {{ namespace }};

use Illuminate\Database\Eloquent\Collection;

class {{ class }} extends Collection
{
    //
}
"""

QUERY_BUILDER = r"""<?php

namespace {{ namespace }};

use Illuminate\Database\Eloquent\Builder;

class {{ class }} extends Builder
{
    //
}
"""

# ── Composition stubs ─────────────────────────────────────────────

COLLECTION_COMPOSITION = r"""    /**
     * Create a new Eloquent Collection instance.
     *
     * @param  array<int, \Illuminate\Database\Eloquent\Model>  $models
     */
    public function newCollection(array $models = []): {{ class }}
    {
        return new {{ class }}($models);
    }
"""

QUERY_BUILDER_COMPOSITION = r"""    /**
     * Create a new Eloquent query builder for the model.
     *
     * @param  \Illuminate\Database\Query\Builder  $query
     */
    public function newEloquentBuilder($query): {{ class }}
    {
        return new {{ class }}($query);
    }
"""

BUILTIN_STUBS: dict[str, str] = {
    "model": MODEL,
    "collection": COLLECTION,
    "collection.composition": COLLECTION_COMPOSITION,
    "query-builder": QUERY_BUILDER,
    "query-builder.composition": QUERY_BUILDER_COMPOSITION,
}
