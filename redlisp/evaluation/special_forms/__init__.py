"""Registry of special forms for the redlisp evaluator.

Maps names to handlers that receive their arguments unevaluated. The
interpreter installs each one in the library scope wrapped in a SpecialForm,
so the evaluator finds them through ordinary identifier lookup.
"""

from redlisp.evaluation.special_forms.if_form import if_form
from redlisp.evaluation.special_forms.lambda_form import lambda_form, macro_form
from redlisp.evaluation.special_forms.let_form import let_form
from redlisp.evaluation.special_forms.define_form import define_form, defn_form
from redlisp.evaluation.special_forms.import_form import import_form

SPECIAL_FORMS = {
    "if": if_form,
    "fn": lambda_form,
    "macro": macro_form,
    "let": let_form,
    "def": define_form,
    "defn": defn_form,
    "import": import_form,
}
